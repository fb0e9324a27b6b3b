# /portal/services/schedule_service.py

"""
Timetable files (usually Excel workbooks) published per class.

An upload stores the file in the object store first and only then writes
the metadata row, so a failed upload leaves nothing behind in the database.
If the row cannot be written, the stored object is removed again.
Re-uploading a timetable with the same title for the same class produces a
new row with the next version number.
"""

import logging
import os
import re
import time
from typing import List, Optional

from fastapi import UploadFile
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..core.exceptions import StorageError
from ..models import schedule_model
from ..models.identity_model import Identity
from . import audit_service, visibility
from .content_helpers import crud
from .database_service import DatabaseService
from .storage_service import LocalObjectStorage, sanitize_name
from .visibility import ContentKind

logger = logging.getLogger(__name__)

DEFAULT_SEMESTER = "Semestre 2"

_XLSX_SUFFIX = re.compile(r"\.xlsx$", re.IGNORECASE)


def default_title(filename: str) -> str:
    return _XLSX_SUFFIX.sub("", filename)


def build_object_path(class_label: str, filename: str, storage: LocalObjectStorage) -> str:
    """`<class>/<millisecond timestamp>_<sanitized filename>`, unique within the bucket."""
    timestamp = int(time.time() * 1000)
    folder, name = sanitize_name(class_label), sanitize_name(filename)
    while storage.exists(f"{folder}/{timestamp}_{name}"):
        timestamp += 1
    return f"{folder}/{timestamp}_{name}"


def _discard_object(object_path: str, storage: LocalObjectStorage) -> None:
    try:
        storage.delete(object_path)
    except StorageError as e:
        logger.error("Orphaned object %s left in storage: %s", object_path, e)


def list_schedules(identity: Identity, db: DatabaseService, class_filter: Optional[str] = None) -> List[schedule_model.ScheduleItem]:
    rows = db.list_schedules(identity)
    return [schedule_model.ScheduleItem.model_validate(row) for row in visibility.filter_visible(identity, rows, class_filter)]


def upload_schedule(
    file: UploadFile,
    identity: Identity,
    db: DatabaseService,
    storage: LocalObjectStorage,
    semester: Optional[str] = None,
    title: Optional[str] = None,
) -> schedule_model.ScheduleItem:
    visibility.assert_can_create(identity, ContentKind.SCHEDULE)

    filename = os.path.basename(file.filename or "emploi_du_temps.xlsx")
    resolved_title = (title or "").strip() or default_title(filename)
    resolved_semester = (semester or "").strip() or DEFAULT_SEMESTER

    object_path = build_object_path(identity.class_label, filename, storage)
    content = file.file.read()
    storage.upload(object_path, content, file.content_type or "application/octet-stream")

    record = {
        "id": crud.new_id("sch"),
        "title": resolved_title,
        "class_label": identity.class_label,
        "semester": resolved_semester,
        "file_ref": object_path,
        "url": storage.public_url(object_path),
        "author_id": identity.id,
    }
    try:
        new_row = db.add_schedule_version(record)
    except SQLAlchemyError:
        _discard_object(object_path, storage)
        raise
    audit_service.record(db, identity, "UPLOAD_SCHEDULE", identity.class_label, f"{resolved_title} v{new_row.version}")
    return schedule_model.ScheduleItem.model_validate(new_row)


def update_schedule(schedule_id: str, update: schedule_model.ScheduleUpdate, identity: Identity, db: DatabaseService) -> Optional[schedule_model.ScheduleItem]:
    data = update.model_dump(exclude_unset=True, exclude_none=True)
    try:
        updated = crud.update_guarded(ContentKind.SCHEDULE, schedule_id, identity, data, db.get_schedule, db.update_schedule)
    except IntegrityError as e:
        raise ValueError("This class already has a timetable with that title and version.") from e
    if updated is None:
        return None
    audit_service.record(db, identity, "UPDATE_SCHEDULE", updated.class_label, updated.title)
    return schedule_model.ScheduleItem.model_validate(updated)


def delete_schedule(schedule_id: str, identity: Identity, db: DatabaseService, storage: LocalObjectStorage) -> bool:
    """Deletes the row, then removes the stored file. A file that cannot be removed is only logged."""
    existing = db.get_schedule(schedule_id)
    file_ref = existing.file_ref if existing is not None else None

    target_class = crud.delete_guarded(ContentKind.SCHEDULE, schedule_id, identity, db.get_schedule, db.delete_schedule)
    if target_class is None:
        return False

    try:
        storage.delete(file_ref)
    except StorageError as e:
        logger.warning("Schedule %s deleted but its file %s was not: %s", schedule_id, file_ref, e)

    audit_service.record(db, identity, "DELETE_SCHEDULE", target_class, schedule_id)
    return True
