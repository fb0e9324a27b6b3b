# /portal/routers/schedules_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Response, UploadFile, status

from ..core.deps import get_current_identity
from ..models import schedule_model
from ..models.identity_model import Identity
from ..services import schedule_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.storage_service import LocalObjectStorage, get_storage

router = APIRouter()


@router.get("", response_model=List[schedule_model.ScheduleItem], summary="List Visible Timetables (Newest First)")
def list_schedules(
    class_filter: Optional[str] = Query(default=None, alias="classFilter"),
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service),
):
    return schedule_service.list_schedules(identity, db, class_filter)


@router.post("/upload", response_model=schedule_model.ScheduleItem, status_code=status.HTTP_201_CREATED, summary="Upload a Timetable File")
def upload_schedule(
    file: UploadFile = File(...),
    semester: Optional[str] = Form(default=None),
    title: Optional[str] = Form(default=None),
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service),
    storage: LocalObjectStorage = Depends(get_storage),
):
    return schedule_service.upload_schedule(file, identity, db, storage, semester=semester, title=title)


@router.put("/{schedule_id}", response_model=schedule_model.ScheduleItem, summary="Rename a Timetable or Change its Semester")
def update_schedule(
    schedule_id: str,
    payload: schedule_model.ScheduleUpdate,
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        updated = schedule_service.update_schedule(schedule_id, payload, identity, db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Schedule with ID {schedule_id} not found")
    return updated


@router.delete("/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Timetable and its File")
def delete_schedule(
    schedule_id: str,
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service),
    storage: LocalObjectStorage = Depends(get_storage),
):
    if not schedule_service.delete_schedule(schedule_id, identity, db, storage):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Schedule with ID {schedule_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
