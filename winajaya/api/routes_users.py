# File: winajaya/api/routes_users.py

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from winajaya.api.deps import get_db, parse_body
from winajaya.core.errors import (
    ConflictError,
    DuplicateEmailError,
    InvalidBranchError,
    UserNotFoundError,
)
from winajaya.schemas.user import UserCreate, UserRead, UserUpdate
from winajaya.services import user_service

router = APIRouter()


def _not_found(exc: UserNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.get("", response_model=List[UserRead], summary="List users")
def list_users(
    branch_id: Optional[int] = None,
    role: Optional[str] = None,
    db: Session = Depends(get_db),
):
    return user_service.list_users(db, branch_id=branch_id, role=role)


@router.get("/{user_id}", response_model=UserRead, summary="Get a user")
def get_user(user_id: int, db: Session = Depends(get_db)):
    try:
        return user_service.get_user(db, user_id)
    except UserNotFoundError as exc:
        raise _not_found(exc)


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
)
def create_user(
    payload: UserCreate = Depends(parse_body(UserCreate)),
    db: Session = Depends(get_db),
):
    """
    Create a user. `role` falls back to "employee" when omitted.
    """
    try:
        return user_service.create_user(db, payload)
    except (DuplicateEmailError, ConflictError) as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    except InvalidBranchError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.api_route(
    "/{user_id}",
    methods=["PUT", "PATCH"],
    response_model=UserRead,
    summary="Update a user",
)
def update_user(
    user_id: int,
    payload: UserUpdate = Depends(parse_body(UserUpdate)),
    db: Session = Depends(get_db),
):
    try:
        return user_service.update_user(db, user_id, payload)
    except UserNotFoundError as exc:
        raise _not_found(exc)
    except (DuplicateEmailError, ConflictError) as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    except InvalidBranchError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a user")
def delete_user(user_id: int, db: Session = Depends(get_db)):
    try:
        user_service.delete_user(db, user_id)
    except UserNotFoundError as exc:
        raise _not_found(exc)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
