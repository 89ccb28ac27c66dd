from datetime import datetime
from pydantic import BaseModel, EmailStr, Field

class GroupCreate(BaseModel):
    name: str = Field(min_length=1)
    creator_name: str = Field(min_length=1)

class GroupOut(BaseModel):
    id: str
    name: str
    created_by: str
    created_at: datetime | None = None

    class Config:
        from_attributes = True

class MemberCreate(BaseModel):
    user_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    email: EmailStr | None = None

class GroupMemberOut(BaseModel):
    user_id: str
    group_id: str
    name: str
    email: str | None = None
    joined_at: datetime | None = None

    class Config:
        from_attributes = True

class Member(BaseModel):
    """A group member as seen by the balance calculator."""
    id: str
    name: str
