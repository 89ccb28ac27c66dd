from sqlalchemy import Column, ForeignKey, String, Numeric
from settleup.db.session import Base
from settleup.models._ids import new_id

class ExpenseSplit(Base):
    __tablename__ = "expense_splits"

    id = Column(String, primary_key=True, default=new_id)
    expense_id = Column(String, ForeignKey("expenses.id", ondelete="CASCADE"), nullable=False, index=True)
    member_id = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
