# File: winajaya/services/auth_service.py

"""
Credential checks for user records.

No tokens are issued here; callers get the matching user back.
"""

from sqlalchemy.orm import Session

from winajaya.core.errors import InvalidCredentialsError
from winajaya.core.security import verify_password
from winajaya.models.user import User
from winajaya.services.user_service import get_user_by_email


def authenticate_user(
    db: Session,
    *,
    email: str,
    password: str,
) -> User:
    user = get_user_by_email(db, email)
    if user is None or not verify_password(password, user.password):
        raise InvalidCredentialsError()
    return user
