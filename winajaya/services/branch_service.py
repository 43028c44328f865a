# File: winajaya/services/branch_service.py

"""
Branch CRUD against a SQLAlchemy session.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from winajaya.core.errors import BranchNotFoundError, ConflictError, DuplicateBranchNameError
from winajaya.models.branch import Branch
from winajaya.schemas.branch import BranchCreate, BranchUpdate

logger = logging.getLogger(__name__)


def list_branches(db: Session) -> List[Branch]:
    return list(db.scalars(select(Branch).order_by(Branch.id)))


def get_branch(db: Session, branch_id: int) -> Branch:
    branch = db.get(Branch, branch_id, options=[selectinload(Branch.users)])
    if branch is None:
        raise BranchNotFoundError(branch_id)
    return branch


def _name_taken(db: Session, name: str, exclude_id: int | None = None) -> bool:
    stmt = select(Branch.id).where(Branch.name == name)
    if exclude_id is not None:
        stmt = stmt.where(Branch.id != exclude_id)
    return db.scalar(stmt) is not None


def _commit(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError(str(exc.orig)) from exc


def create_branch(db: Session, payload: BranchCreate) -> Branch:
    if _name_taken(db, payload.name):
        raise DuplicateBranchNameError(payload.name)

    branch = Branch(**payload.model_dump())
    db.add(branch)
    _commit(db)
    db.refresh(branch)
    logger.info("Created branch %s (%s)", branch.id, branch.name)
    return branch


def update_branch(db: Session, branch_id: int, payload: BranchUpdate) -> Branch:
    branch = get_branch(db, branch_id)
    changes = payload.model_dump(exclude_unset=True)

    if changes.get("name") is None:
        changes.pop("name", None)
    elif _name_taken(db, changes["name"], exclude_id=branch_id):
        raise DuplicateBranchNameError(changes["name"])

    for field, value in changes.items():
        setattr(branch, field, value)

    _commit(db)
    db.refresh(branch)
    return branch


def delete_branch(db: Session, branch_id: int) -> None:
    branch = get_branch(db, branch_id)
    # Unassign explicitly so engines without FK enforcement end up the same
    for member in branch.users:
        member.branch_id = None
    db.delete(branch)
    _commit(db)
    logger.info("Deleted branch %s", branch_id)
