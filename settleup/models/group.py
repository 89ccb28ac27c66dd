from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from settleup.db.session import Base
from settleup.models._ids import new_id

class Group(Base):
    __tablename__ = "groups"

    id = Column(String, primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    created_by = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    members = relationship(
        "GroupMember",
        back_populates="group",
        cascade="all, delete"
    )
