from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from settleup.db.session import get_db
from settleup.services.group_services import create_group, add_member, list_members, list_group_for_user
from settleup.services.settlement_service import compute_group_settlements
from settleup.schemas.balances import GroupBalanceOut
from settleup.schemas.group import GroupCreate, GroupMemberOut, GroupOut, MemberCreate
from settleup.schemas.user import CurrentUser
from settleup.core.dependencies import get_current_user

router = APIRouter()

@router.post("/", response_model=GroupOut, status_code=201)
async def create_new_group(
    data: GroupCreate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user)
):
    return await create_group(db, data, user)

@router.get("/my-groups", response_model=list[GroupOut])
async def my_groups(db: AsyncSession = Depends(get_db), user: CurrentUser = Depends(get_current_user)):
    return await list_group_for_user(db, user.id)

@router.post("/{group_id}/members", response_model=GroupMemberOut, status_code=201)
async def add_user_to_group(
    group_id: str,
    data: MemberCreate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user)
):
    return await add_member(db, group_id, data, user.id)

@router.get("/{group_id}/members", response_model=list[GroupMemberOut])
async def group_members(group_id: str, db: AsyncSession = Depends(get_db), user: CurrentUser = Depends(get_current_user)):
    return await list_members(db, group_id, user.id)

@router.get("/{group_id}/balances", response_model=GroupBalanceOut)
async def group_balances(group_id: str, db: AsyncSession = Depends(get_db), user: CurrentUser = Depends(get_current_user)):
    return await compute_group_settlements(db, group_id, user.id)
