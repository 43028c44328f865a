# File: winajaya/services/user_service.py

"""
User CRUD against a SQLAlchemy session.

Email uniqueness and branch references are checked here before writing;
the table constraints still back both up, and a constraint violation on
commit surfaces as ConflictError.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from winajaya.core.errors import (
    ConflictError,
    DuplicateEmailError,
    InvalidBranchError,
    UserNotFoundError,
)
from winajaya.core.security import get_password_hash
from winajaya.models.branch import Branch
from winajaya.models.user import User
from winajaya.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def list_users(
    db: Session,
    *,
    branch_id: Optional[int] = None,
    role: Optional[str] = None,
) -> List[User]:
    stmt = select(User).order_by(User.id)
    if branch_id is not None:
        stmt = stmt.where(User.branch_id == branch_id)
    if role is not None:
        stmt = stmt.where(User.role == role)
    return list(db.scalars(stmt))


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return user


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.scalars(select(User).where(User.email == email)).first()


def _check_email_free(db: Session, email: str, exclude_id: Optional[int] = None) -> None:
    existing = get_user_by_email(db, email)
    if existing is not None and existing.id != exclude_id:
        raise DuplicateEmailError(email)


def _check_branch(db: Session, branch_id: Optional[int]) -> None:
    if branch_id is not None and db.get(Branch, branch_id) is None:
        raise InvalidBranchError(branch_id)


def _commit(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError(str(exc.orig)) from exc


def create_user(db: Session, payload: UserCreate) -> User:
    _check_email_free(db, payload.email)
    _check_branch(db, payload.branch_id)

    data = payload.model_dump()
    data["password"] = get_password_hash(payload.password)

    user = User(**data)
    db.add(user)
    _commit(db)
    db.refresh(user)
    logger.info("Created user %s with role %s", user.id, user.role)
    return user


def update_user(db: Session, user_id: int, payload: UserUpdate) -> User:
    user = get_user(db, user_id)
    changes = payload.model_dump(exclude_unset=True)

    # Required columns cannot be cleared by sending null
    for field in ("name", "email", "password", "role"):
        if field in changes and changes[field] is None:
            del changes[field]

    if "email" in changes:
        _check_email_free(db, changes["email"], exclude_id=user_id)
    if "branch_id" in changes:
        _check_branch(db, changes["branch_id"])
    if "password" in changes:
        changes["password"] = get_password_hash(changes["password"])

    for field, value in changes.items():
        setattr(user, field, value)

    _commit(db)
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: int) -> None:
    user = get_user(db, user_id)
    db.delete(user)
    _commit(db)
    logger.info("Deleted user %s", user_id)
