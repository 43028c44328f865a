# File: winajaya/schemas/user.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from winajaya.models.user import DEFAULT_ROLE


class UserBase(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    role: str = Field(default=DEFAULT_ROLE, min_length=1)
    branch_id: Optional[int] = None


class UserCreate(UserBase):
    password: str = Field(min_length=1)


class UserUpdate(BaseModel):
    """All fields optional; only the ones sent are applied."""

    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=1)
    role: Optional[str] = Field(default=None, min_length=1)
    branch_id: Optional[int] = None


class UserRead(UserBase):
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True  # Pydantic v2: replaces orm_mode
