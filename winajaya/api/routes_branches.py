# File: winajaya/api/routes_branches.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from winajaya.api.deps import get_db, parse_body
from winajaya.core.errors import BranchNotFoundError, ConflictError, DuplicateBranchNameError
from winajaya.schemas.branch import BranchCreate, BranchDetail, BranchRead, BranchUpdate
from winajaya.services import branch_service

router = APIRouter()


@router.get("", response_model=List[BranchRead], summary="List branches")
def list_branches(db: Session = Depends(get_db)):
    return branch_service.list_branches(db)


@router.get("/{branch_id}", response_model=BranchDetail, summary="Get a branch and its users")
def get_branch(branch_id: int, db: Session = Depends(get_db)):
    try:
        return branch_service.get_branch(db, branch_id)
    except BranchNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.post(
    "",
    response_model=BranchRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a branch",
)
def create_branch(
    payload: BranchCreate = Depends(parse_body(BranchCreate)),
    db: Session = Depends(get_db),
):
    try:
        return branch_service.create_branch(db, payload)
    except (DuplicateBranchNameError, ConflictError) as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))


@router.api_route(
    "/{branch_id}",
    methods=["PUT", "PATCH"],
    response_model=BranchRead,
    summary="Update a branch",
)
def update_branch(
    branch_id: int,
    payload: BranchUpdate = Depends(parse_body(BranchUpdate)),
    db: Session = Depends(get_db),
):
    try:
        return branch_service.update_branch(db, branch_id, payload)
    except BranchNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except (DuplicateBranchNameError, ConflictError) as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))


@router.delete("/{branch_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a branch")
def delete_branch(branch_id: int, db: Session = Depends(get_db)):
    """
    Delete a branch. Its users stay, with branch_id cleared.
    """
    try:
        branch_service.delete_branch(db, branch_id)
    except BranchNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
