# /portal/services/meeting_service.py

from typing import List, Optional

from ..models import meeting_model
from ..models.identity_model import Identity
from . import audit_service, visibility
from .content_helpers import crud
from .database_service import DatabaseService
from .visibility import ContentKind


def list_meetings(identity: Identity, db: DatabaseService, class_filter: Optional[str] = None) -> List[meeting_model.Meeting]:
    rows = db.list_meetings(identity)
    return [meeting_model.Meeting.model_validate(row) for row in visibility.filter_visible(identity, rows, class_filter)]


def create_meeting(data: meeting_model.MeetingCreate, identity: Identity, db: DatabaseService) -> meeting_model.Meeting:
    """Publishes a meeting link for the author's class. Administrators never originate meetings."""
    visibility.assert_can_create(identity, ContentKind.MEETING)
    record = {
        "id": crud.new_id("meet"),
        "class_label": identity.class_label,
        "author_id": identity.id,
        "author_name": identity.display_name,
        **data.model_dump(mode="json", exclude={"date"}),
        "date": data.date,
    }
    new_row = db.add_meeting(record)
    audit_service.record(db, identity, "CREATE_MEETING", identity.class_label, data.title)
    return meeting_model.Meeting.model_validate(new_row)


def update_meeting(meeting_id: str, update: meeting_model.MeetingUpdate, identity: Identity, db: DatabaseService) -> Optional[meeting_model.Meeting]:
    data = update.model_dump(exclude_unset=True, exclude_none=True)
    if "platform" in data:
        data["platform"] = data["platform"].value
    updated = crud.update_guarded(ContentKind.MEETING, meeting_id, identity, data, db.get_meeting, db.update_meeting)
    if updated is None:
        return None
    audit_service.record(db, identity, "UPDATE_MEETING", updated.class_label, updated.title)
    return meeting_model.Meeting.model_validate(updated)


def delete_meeting(meeting_id: str, identity: Identity, db: DatabaseService) -> bool:
    target_class = crud.delete_guarded(ContentKind.MEETING, meeting_id, identity, db.get_meeting, db.delete_meeting)
    if target_class is None:
        return False
    audit_service.record(db, identity, "DELETE_MEETING", target_class, meeting_id)
    return True
