from pydantic import BaseModel, Field
from typing import List

from settleup.schemas.expense import Expense, SplitInput
from settleup.schemas.group import Member
from settleup.schemas.money import Money
from settleup.schemas.settlements import RecordedSettlement, Settlement

class Balance(BaseModel):
    member_id: str
    amount: Money

class LedgerSnapshot(BaseModel):
    members: List[Member]
    expenses: List[Expense] = []
    recorded: List[RecordedSettlement] = []

class BalancesIn(BaseModel):
    balances: List[Balance]

class SplitValidationIn(BaseModel):
    total: Money = Field(gt=0)
    splits: List[Money]

class SplitValidationOut(BaseModel):
    valid: bool
    allocated: Money
    difference: Money

class GroupBalanceOut(BaseModel):
    group_id: str | None = None
    balances: List[Balance]
    settlements: List[Settlement]

class EqualSharesIn(BaseModel):
    amount: Money = Field(gt=0)
    member_ids: List[str]

class EqualSharesOut(BaseModel):
    splits: List[SplitInput]
