# File: winajaya/schemas/auth.py

from pydantic import BaseModel, EmailStr

from winajaya.schemas.user import UserRead


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class LoginResponse(BaseModel):
    message: str
    user: UserRead
