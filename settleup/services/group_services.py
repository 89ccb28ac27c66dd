from typing import List

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from settleup.core.dependencies import check_group_membership
from settleup.models.group import Group
from settleup.models.group_member import GroupMember
from settleup.schemas.group import GroupCreate, Member, MemberCreate
from settleup.schemas.user import CurrentUser

async def create_group(db: AsyncSession, data: GroupCreate, creator: CurrentUser):
    group = Group(name=data.name, created_by=creator.id)
    db.add(group)
    await db.flush()

    member = GroupMember(
        group_id=group.id,
        user_id=creator.id,
        name=data.creator_name,
        email=creator.email,
    )
    db.add(member)

    await db.commit()
    await db.refresh(group)
    return group

async def add_member(db: AsyncSession, group_id: str, data: MemberCreate, user_id: str):
    await check_group_membership(db, group_id, user_id)

    q = select(GroupMember).where(
        GroupMember.group_id == group_id,
        GroupMember.user_id == data.user_id
    )
    if await db.scalar(q):
        raise HTTPException(409, "User is already a member of this group")

    member = GroupMember(
        group_id=group_id,
        user_id=data.user_id,
        name=data.name,
        email=data.email,
    )
    db.add(member)
    await db.commit()
    await db.refresh(member)
    return member

async def list_members(db: AsyncSession, group_id: str, user_id: str):
    await check_group_membership(db, group_id, user_id)

    q = (
        select(GroupMember)
        .where(GroupMember.group_id == group_id)
        .order_by(GroupMember.joined_at, GroupMember.name)
    )
    result = await db.execute(q)
    return result.scalars().all()

async def list_group_for_user(db: AsyncSession, user_id: str):
    q = (
        select(Group)
        .join(GroupMember)
        .where(GroupMember.user_id == user_id)
        .order_by(Group.name)
    )
    result = await db.execute(q)
    return result.scalars().all()

async def fetch_members(db: AsyncSession, group_id: str) -> List[Member]:
    q = (
        select(GroupMember)
        .where(GroupMember.group_id == group_id)
        .order_by(GroupMember.joined_at, GroupMember.name)
    )
    rows = (await db.scalars(q)).all()
    return [Member(id=row.user_id, name=row.name) for row in rows]
