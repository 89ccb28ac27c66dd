from decimal import Decimal

from fastapi import APIRouter

from settleup.core.balances import compute_balances, equal_shares, validate_manual_splits
from settleup.core.settlements import compute_settlements
from settleup.schemas.balances import (
    BalancesIn,
    EqualSharesIn,
    EqualSharesOut,
    GroupBalanceOut,
    LedgerSnapshot,
    SplitValidationIn,
    SplitValidationOut,
)
from settleup.schemas.expense import SplitInput
from settleup.schemas.settlements import Settlement

router = APIRouter()

# Stateless endpoints, the caller supplies the snapshot.

@router.post("/balances", response_model=GroupBalanceOut)
async def balances_from_snapshot(data: LedgerSnapshot):
    balances = compute_balances(data.members, data.expenses, data.recorded)
    return GroupBalanceOut(balances=balances, settlements=compute_settlements(balances))

@router.post("/settlements", response_model=list[Settlement])
async def settlements_from_balances(data: BalancesIn):
    return compute_settlements(data.balances)

@router.post("/validate-splits", response_model=SplitValidationOut)
async def validate_splits(data: SplitValidationIn):
    allocated = sum(data.splits, Decimal("0"))
    return SplitValidationOut(
        valid=validate_manual_splits(data.splits, data.total),
        allocated=allocated,
        difference=data.total - allocated,
    )

@router.post("/equal-shares", response_model=EqualSharesOut)
async def preview_equal_shares(data: EqualSharesIn):
    shares = equal_shares(data.amount, data.member_ids)
    return EqualSharesOut(
        splits=[SplitInput(member_id=member_id, amount=amount) for member_id, amount in shares]
    )
