# File: winajaya/models/branch.py

"""
Branch model.

A business location; users may be assigned to at most one branch.
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from winajaya.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from winajaya.models.user import User


class Branch(TimestampMixin, Base):
    __tablename__ = "branches"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Deleting a branch leaves its users unassigned (FK is ON DELETE SET NULL)
    users: Mapped[List["User"]] = relationship(
        back_populates="branch",
        passive_deletes=True,
        order_by="User.id",
    )
