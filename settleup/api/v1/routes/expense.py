from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from settleup.db.session import get_db
from settleup.schemas.expense import Expense, ExpenseCreate
from settleup.schemas.user import CurrentUser
from settleup.services.expense_services import create_expense, get_expenses_by_group
from settleup.core.dependencies import get_current_user

router = APIRouter()

@router.post("/{group_id}", response_model=Expense, status_code=201)
async def add_expense(
    group_id: str,
    data: ExpenseCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return await create_expense(db, data, group_id, current_user.id)

@router.get("/{group_id}", response_model=list[Expense])
async def all_expenses(
    group_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return await get_expenses_by_group(db, group_id, current_user.id)
