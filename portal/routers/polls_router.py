# /portal/routers/polls_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ..core.deps import get_current_identity
from ..models import poll_model
from ..models.identity_model import Identity
from ..services import poll_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get("", response_model=List[poll_model.Poll], summary="List Visible Polls with Results")
def list_polls(
    class_filter: Optional[str] = Query(default=None, alias="classFilter"),
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service),
):
    return poll_service.list_polls(identity, db, class_filter)


@router.post("", response_model=poll_model.Poll, status_code=status.HTTP_201_CREATED, summary="Create a Poll")
def create_poll(
    payload: poll_model.PollCreate,
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service),
):
    return poll_service.create_poll(payload, identity, db)


@router.get("/{poll_id}", response_model=poll_model.Poll, summary="Get a Single Poll")
def get_poll(
    poll_id: str,
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service),
):
    poll = poll_service.get_poll(poll_id, identity, db)
    if poll is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Poll with ID {poll_id} not found")
    return poll


@router.patch("/{poll_id}", response_model=poll_model.Poll, summary="Edit the Question or Open/Close a Poll")
def update_poll(
    poll_id: str,
    payload: poll_model.PollUpdate,
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        updated = poll_service.update_poll(poll_id, payload, identity, db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Poll with ID {poll_id} not found")
    return updated


@router.delete("/{poll_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Poll")
def delete_poll(
    poll_id: str,
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service),
):
    if not poll_service.delete_poll(poll_id, identity, db):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Poll with ID {poll_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{poll_id}/vote", response_model=poll_model.Poll, summary="Vote (or Change Vote) on a Poll")
def vote(
    poll_id: str,
    payload: poll_model.VoteRequest,
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        return poll_service.vote(poll_id, payload.option_id, identity, db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
