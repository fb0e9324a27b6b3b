# /portal/routers/exams_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ..core.deps import get_current_identity
from ..models import exam_model
from ..models.identity_model import Identity
from ..services import exam_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get("", response_model=List[exam_model.Exam], summary="List Visible Exams (Soonest First)")
def list_exams(
    class_filter: Optional[str] = Query(default=None, alias="classFilter"),
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service),
):
    return exam_service.list_exams(identity, db, class_filter)


@router.post("", response_model=exam_model.Exam, status_code=status.HTTP_201_CREATED, summary="Schedule an Exam")
def create_exam(
    payload: exam_model.ExamCreate,
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service),
):
    return exam_service.create_exam(payload, identity, db)


@router.put("/{exam_id}", response_model=exam_model.Exam, summary="Update an Exam")
def update_exam(
    exam_id: str,
    payload: exam_model.ExamUpdate,
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        updated = exam_service.update_exam(exam_id, payload, identity, db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Exam with ID {exam_id} not found")
    return updated


@router.delete("/{exam_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an Exam")
def delete_exam(
    exam_id: str,
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service),
):
    if not exam_service.delete_exam(exam_id, identity, db):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Exam with ID {exam_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
