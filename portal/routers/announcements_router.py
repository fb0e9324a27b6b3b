# /portal/routers/announcements_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ..core.deps import get_current_identity
from ..models import announcement_model
from ..models.identity_model import Identity
from ..services import announcement_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get("", response_model=List[announcement_model.Announcement], summary="List Visible Announcements")
def list_announcements(
    class_filter: Optional[str] = Query(default=None, alias="classFilter"),
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service),
):
    return announcement_service.list_announcements(identity, db, class_filter)


@router.post("", response_model=announcement_model.Announcement, status_code=status.HTTP_201_CREATED, summary="Publish an Announcement")
def create_announcement(
    payload: announcement_model.AnnouncementCreate,
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service),
):
    return announcement_service.create_announcement(payload, identity, db)


@router.put("/{announcement_id}", response_model=announcement_model.Announcement, summary="Edit an Announcement")
def update_announcement(
    announcement_id: str,
    payload: announcement_model.AnnouncementUpdate,
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        updated = announcement_service.update_announcement(announcement_id, payload, identity, db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Announcement with ID {announcement_id} not found")
    return updated


@router.delete("/{announcement_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an Announcement")
def delete_announcement(
    announcement_id: str,
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service),
):
    if not announcement_service.delete_announcement(announcement_id, identity, db):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Announcement with ID {announcement_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
