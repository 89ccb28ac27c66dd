from datetime import datetime
from pydantic import BaseModel, Field

from settleup.schemas.money import Money

class Settlement(BaseModel):
    from_member: str
    to_member: str
    amount: Money
    is_settled: bool = False
    settled_at: datetime | None = None

class RecordedSettlement(BaseModel):
    id: str | None = None
    group_id: str | None = None
    from_member: str
    to_member: str
    amount: Money = Field(gt=0)
    settled_at: datetime | None = None
    settled_by: str | None = None

    class Config:
        from_attributes = True

class SettlementCreate(BaseModel):
    to_member: str
    amount: Money = Field(gt=0)
