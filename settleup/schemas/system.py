from pydantic import BaseModel
from typing import Optional

class HealthOut(BaseModel):
    status: str

class DbHealthOut(BaseModel):
    db: bool
    message: Optional[str] = None
    error: Optional[str] = None

class MetricsOut(BaseModel):
    groups: int
    expenses: int
    settlements: int
