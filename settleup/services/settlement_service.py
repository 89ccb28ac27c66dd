import logging
from typing import List

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from settleup.core.balances import compute_balances
from settleup.core.dependencies import check_group_membership
from settleup.core.settlements import compute_settlements, mark_recorded
from settleup.models.group_member import GroupMember
from settleup.models.settlement import Settlement
from settleup.schemas.balances import GroupBalanceOut
from settleup.schemas.settlements import RecordedSettlement, SettlementCreate
from settleup.services.expense_services import fetch_expenses
from settleup.services.group_services import fetch_members

logger = logging.getLogger(__name__)

async def fetch_recorded_settlements(db: AsyncSession, group_id: str) -> List[RecordedSettlement]:
    q = (
        select(Settlement)
        .where(Settlement.group_id == group_id)
        .order_by(Settlement.settled_at.desc())
    )
    rows = (await db.scalars(q)).all()
    return [RecordedSettlement.model_validate(r) for r in rows]

async def compute_group_settlements(db: AsyncSession, group_id: str, user_id: str) -> GroupBalanceOut:
    await check_group_membership(db, group_id, user_id)

    # Fresh snapshot on every request, nothing is cached
    members = await fetch_members(db, group_id)
    expenses = await fetch_expenses(db, group_id)
    recorded = await fetch_recorded_settlements(db, group_id)

    balances = compute_balances(members, expenses, recorded)
    settlements = mark_recorded(compute_settlements(balances), recorded)

    return GroupBalanceOut(group_id=group_id, balances=balances, settlements=settlements)

async def add_settlement(db: AsyncSession, group_id: str, user_id: str, data: SettlementCreate):
    # Payments are recorded by the member who owes the money
    await check_group_membership(db, group_id, user_id)

    if data.to_member == user_id:
        raise HTTPException(400, "You cannot settle with yourself")

    q = select(GroupMember).where(
        GroupMember.group_id == group_id,
        GroupMember.user_id == data.to_member
    )
    if not await db.scalar(q):
        raise HTTPException(400, "Receiver is not in this group")

    settlement = Settlement(
        group_id=group_id,
        from_member=user_id,
        to_member=data.to_member,
        amount=data.amount,
        settled_by=user_id,
    )

    db.add(settlement)
    await db.commit()
    await db.refresh(settlement)

    logger.info("Settlement %s recorded: %s paid %s %s", settlement.id, user_id, data.to_member, data.amount)
    return RecordedSettlement.model_validate(settlement)

async def get_settlement_history(db: AsyncSession, group_id: str, user_id: str):
    await check_group_membership(db, group_id, user_id)
    return await fetch_recorded_settlements(db, group_id)
