# File: winajaya/models/user.py

"""
User model.

`password` holds a hash produced by winajaya.core.security, never the
plain value.
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from winajaya.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from winajaya.models.branch import Branch

DEFAULT_ROLE = "employee"


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=DEFAULT_ROLE,
        server_default=DEFAULT_ROLE,
    )
    branch_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("branches.id", ondelete="SET NULL"),
        nullable=True,
    )

    branch: Mapped[Optional["Branch"]] = relationship(back_populates="users")
