# File: winajaya/core/security.py

"""
Password hashing helpers.

Passwords are never stored as given; the `password` column holds a passlib
hash. pbkdf2_sha256 keeps us free of native extensions.
"""

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    # Rows carried over with plain-text or foreign hashes never verify
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False
