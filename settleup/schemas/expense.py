import datetime as dt
from pydantic import BaseModel, Field
from typing import List, Literal

from settleup.schemas.money import Money

SplitType = Literal["equal", "manual"]

class ExpenseSplit(BaseModel):
    id: str | None = None
    expense_id: str | None = None
    member_id: str
    amount: Money = Field(ge=0)

    class Config:
        from_attributes = True

class Expense(BaseModel):
    id: str | None = None
    group_id: str | None = None
    description: str = ""
    amount: Money = Field(gt=0)
    paid_by: str
    date: dt.date | None = None
    split_type: SplitType = "equal"
    splits: List[ExpenseSplit] = []

    class Config:
        from_attributes = True

class SplitInput(BaseModel):
    member_id: str
    amount: Money = Field(ge=0)

class ExpenseCreate(BaseModel):
    description: str = Field(min_length=1)
    amount: Money = Field(gt=0)
    paid_by: str | None = None
    date: dt.date | None = None
    split_type: SplitType = "equal"
    splits: List[SplitInput] = []
