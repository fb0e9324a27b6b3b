# /portal/routers/meetings_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ..core.deps import get_current_identity
from ..models import meeting_model
from ..models.identity_model import Identity
from ..services import meeting_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get("", response_model=List[meeting_model.Meeting], summary="List Visible Meetings")
def list_meetings(
    class_filter: Optional[str] = Query(default=None, alias="classFilter"),
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service),
):
    return meeting_service.list_meetings(identity, db, class_filter)


@router.post("", response_model=meeting_model.Meeting, status_code=status.HTTP_201_CREATED, summary="Share a Meeting Link")
def create_meeting(
    payload: meeting_model.MeetingCreate,
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service),
):
    return meeting_service.create_meeting(payload, identity, db)


@router.put("/{meeting_id}", response_model=meeting_model.Meeting, summary="Update a Meeting")
def update_meeting(
    meeting_id: str,
    payload: meeting_model.MeetingUpdate,
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        updated = meeting_service.update_meeting(meeting_id, payload, identity, db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Meeting with ID {meeting_id} not found")
    return updated


@router.delete("/{meeting_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Meeting")
def delete_meeting(
    meeting_id: str,
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service),
):
    if not meeting_service.delete_meeting(meeting_id, identity, db):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Meeting with ID {meeting_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
