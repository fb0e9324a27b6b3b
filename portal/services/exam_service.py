# /portal/services/exam_service.py

from typing import List, Optional

from ..models import exam_model
from ..models.identity_model import Identity
from . import audit_service, visibility
from .content_helpers import crud
from .database_service import DatabaseService
from .visibility import ContentKind


def list_exams(identity: Identity, db: DatabaseService, class_filter: Optional[str] = None) -> List[exam_model.Exam]:
    rows = db.list_exams(identity)
    return [exam_model.Exam.model_validate(row) for row in visibility.filter_visible(identity, rows, class_filter)]


def create_exam(data: exam_model.ExamCreate, identity: Identity, db: DatabaseService) -> exam_model.Exam:
    """Schedules an exam for the author's own class."""
    visibility.assert_can_create(identity, ContentKind.EXAM)
    record = {
        "id": crud.new_id("exam"),
        "class_label": identity.class_label,
        "author_id": identity.id,
        **data.model_dump(),
    }
    new_row = db.add_exam(record)
    audit_service.record(db, identity, "CREATE_EXAM", identity.class_label, data.subject)
    return exam_model.Exam.model_validate(new_row)


def update_exam(exam_id: str, update: exam_model.ExamUpdate, identity: Identity, db: DatabaseService) -> Optional[exam_model.Exam]:
    data = update.model_dump(exclude_unset=True)
    # Notes are the only optional column; every other field keeps its value when sent as null.
    data = {key: value for key, value in data.items() if value is not None or key == "notes"}
    updated = crud.update_guarded(ContentKind.EXAM, exam_id, identity, data, db.get_exam, db.update_exam)
    if updated is None:
        return None
    audit_service.record(db, identity, "UPDATE_EXAM", updated.class_label, updated.subject)
    return exam_model.Exam.model_validate(updated)


def delete_exam(exam_id: str, identity: Identity, db: DatabaseService) -> bool:
    target_class = crud.delete_guarded(ContentKind.EXAM, exam_id, identity, db.get_exam, db.delete_exam)
    if target_class is None:
        return False
    audit_service.record(db, identity, "DELETE_EXAM", target_class, exam_id)
    return True
