import logging
from datetime import date
from decimal import Decimal
from typing import List

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from settleup.core.balances import validate_manual_splits
from settleup.core.dependencies import check_group_membership
from settleup.models.expense import Expense
from settleup.models.expense_split import ExpenseSplit
from settleup.models.group_member import GroupMember
from settleup.schemas.expense import Expense as ExpenseSnapshot, ExpenseCreate

logger = logging.getLogger(__name__)

async def fetch_expenses(db: AsyncSession, group_id: str) -> List[ExpenseSnapshot]:
    q = (
        select(Expense)
        .where(Expense.group_id == group_id)
        .order_by(Expense.date.desc(), Expense.created_at.desc())
    )
    expenses = (await db.scalars(q)).all()
    return [ExpenseSnapshot.model_validate(e) for e in expenses]

async def create_expense(db: AsyncSession, data: ExpenseCreate, group_id: str, user_id: str):
    await check_group_membership(db, group_id, user_id)

    paid_by = data.paid_by or user_id

    # -----------------------------------
    # 1. Payer must belong to the group
    # -----------------------------------
    members_q = select(GroupMember.user_id).where(GroupMember.group_id == group_id)
    member_ids = set((await db.scalars(members_q)).all())

    if paid_by not in member_ids:
        raise HTTPException(400, "Payer is not a member of the group")

    # -----------------------------------
    # 2. Validate splits for the chosen strategy
    # -----------------------------------
    split_ids = [s.member_id for s in data.splits]

    if data.split_type == "equal":
        if data.splits:
            raise HTTPException(400, "Splits are only accepted for manual expenses")
    else:
        if not data.splits:
            raise HTTPException(400, "Manual expenses need at least one split")

        if len(split_ids) != len(set(split_ids)):
            raise HTTPException(400, "Duplicate members found in splits")

        if not set(split_ids) <= member_ids:
            raise HTTPException(
                400,
                "One or more members in splits are not members of the group"
            )

        if not validate_manual_splits([s.amount for s in data.splits], data.amount):
            total_split = sum((s.amount for s in data.splits), Decimal("0"))
            raise HTTPException(
                400,
                f"Split total ({total_split}) must equal expense amount ({data.amount})"
            )

    # -----------------------------------
    # 3. Create expense with its splits
    # -----------------------------------
    expense = Expense(
        group_id=group_id,
        description=data.description,
        amount=data.amount,
        paid_by=paid_by,
        date=data.date or date.today(),
        split_type=data.split_type,
    )
    expense.splits = [
        ExpenseSplit(member_id=s.member_id, amount=s.amount)
        for s in data.splits
    ]

    db.add(expense)
    await db.commit()

    logger.info("Expense %s added to group %s (%s, %s)", expense.id, group_id, data.amount, data.split_type)
    return ExpenseSnapshot.model_validate(expense)

async def get_expenses_by_group(db: AsyncSession, group_id: str, user_id: str):
    await check_group_membership(db, group_id, user_id)
    return await fetch_expenses(db, group_id)
