from sqlalchemy import Column, ForeignKey, String, DateTime, UniqueConstraint, func
from sqlalchemy.orm import relationship
from settleup.db.session import Base
from settleup.models._ids import new_id

class GroupMember(Base):
    __tablename__ = "group_members"
    __table_args__ = (
        UniqueConstraint("group_id", "user_id", name="uq_group_member_user"),
    )

    id = Column(String, primary_key=True, default=new_id)

    group_id = Column(String, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String, nullable=False)
    name = Column(String, nullable=False)
    email = Column(String, nullable=True)
    joined_at = Column(DateTime(timezone=True), server_default=func.now())

    group = relationship("Group", back_populates="members")
