# File: winajaya/schemas/branch.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from winajaya.schemas.user import UserRead


class BranchBase(BaseModel):
    name: str = Field(min_length=1)
    address: Optional[str] = None


class BranchCreate(BranchBase):
    pass


class BranchUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    address: Optional[str] = None


class BranchRead(BranchBase):
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class BranchDetail(BranchRead):
    users: List[UserRead] = []
