# File: winajaya/api/routes_auth.py

"""
Auth API routes.

Login checks a user's credentials and returns the user record. Session or
token issuance is left to the frontend's hosting setup.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from winajaya.api.deps import get_db, parse_body
from winajaya.core.errors import InvalidCredentialsError
from winajaya.schemas.auth import LoginRequest, LoginResponse
from winajaya.schemas.user import UserRead
from winajaya.services.auth_service import authenticate_user

router = APIRouter()


@router.post("/login", response_model=LoginResponse, summary="Check user credentials")
def login(
    payload: LoginRequest = Depends(parse_body(LoginRequest)),
    db: Session = Depends(get_db),
):
    try:
        user = authenticate_user(db, email=payload.email, password=payload.password)
    except InvalidCredentialsError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc))

    return LoginResponse(message="Login successful", user=UserRead.model_validate(user))
