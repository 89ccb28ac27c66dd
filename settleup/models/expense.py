from sqlalchemy import Column, ForeignKey, String, Numeric, Date, DateTime, func
from sqlalchemy.orm import relationship
from settleup.db.session import Base
from settleup.models._ids import new_id

class Expense(Base):
    __tablename__ = "expenses"

    id = Column(String, primary_key=True, default=new_id)
    group_id = Column(String, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True)
    description = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    paid_by = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    split_type = Column(String, nullable=False, server_default="equal")
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    splits = relationship(
        "ExpenseSplit",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
