# Imported by alembic and table creation so every model is registered on Base.
from settleup.db.session import Base
from settleup.models.group import Group
from settleup.models.group_member import GroupMember
from settleup.models.expense import Expense
from settleup.models.expense_split import ExpenseSplit
from settleup.models.settlement import Settlement

__all__ = ["Base", "Group", "GroupMember", "Expense", "ExpenseSplit", "Settlement"]
