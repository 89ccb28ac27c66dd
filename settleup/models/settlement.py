from sqlalchemy import Column, String, Numeric, DateTime, ForeignKey
from sqlalchemy.sql import func
from settleup.db.session import Base
from settleup.models._ids import new_id

class Settlement(Base):
    __tablename__ = "settlements"

    id = Column(String, primary_key=True, default=new_id)
    group_id = Column(String, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True)
    from_member = Column(String, nullable=False)
    to_member = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    settled_by = Column(String, nullable=False)

    settled_at = Column(DateTime(timezone=True), server_default=func.now())
