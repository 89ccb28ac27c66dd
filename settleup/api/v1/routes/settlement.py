from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from settleup.db.session import get_db
from settleup.schemas.settlements import RecordedSettlement, SettlementCreate
from settleup.schemas.user import CurrentUser
from settleup.services.settlement_service import add_settlement, get_settlement_history
from settleup.core.dependencies import get_current_user

router = APIRouter()

@router.post("/{group_id}", response_model=RecordedSettlement, status_code=201)
async def record_settlement(
    group_id: str,
    data: SettlementCreate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    return await add_settlement(db, group_id, user.id, data)

@router.get("/{group_id}", response_model=list[RecordedSettlement])
async def settlement_history(
    group_id: str,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    return await get_settlement_history(db, group_id, user.id)
