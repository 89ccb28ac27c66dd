from fastapi import Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from settleup.core.security import verify_token
from settleup.models.group import Group
from settleup.models.group_member import GroupMember
from settleup.schemas.user import CurrentUser


async def get_current_user(payload: dict = Depends(verify_token)) -> CurrentUser:
    user_id = payload.get("sub")

    if user_id is None:
        raise HTTPException(status_code=401, detail="Invalid authentication credentials")

    metadata = payload.get("user_metadata") or {}
    return CurrentUser(
        id=str(user_id),
        email=payload.get("email"),
        name=metadata.get("name"),
    )


async def check_group_membership(db: AsyncSession, group_id: str, user_id: str) -> GroupMember:
    q_group = select(Group).where(Group.id == group_id)
    res_group = await db.execute(q_group)
    group = res_group.scalar_one_or_none()

    if not group:
        raise HTTPException(404, "Group does not exist")

    q_member = select(GroupMember).where(
        GroupMember.group_id == group_id,
        GroupMember.user_id == user_id
    )

    res_member = await db.execute(q_member)
    member = res_member.scalar_one_or_none()

    if not member:
        raise HTTPException(403, "You are not a member of this group")

    return member
