# /portal/services/announcement_service.py

"""
Business logic for class announcements: listing through the visibility
filter, publishing, editing and deleting under the shared mutation rule.
"""

from typing import List, Optional

from ..models import announcement_model
from ..models.identity_model import Identity, Role
from . import audit_service, visibility
from .content_helpers import crud
from .database_service import DatabaseService
from .visibility import ContentKind


def _to_model(row) -> announcement_model.Announcement:
    return announcement_model.Announcement.model_validate(row)


def list_announcements(identity: Identity, db: DatabaseService, class_filter: Optional[str] = None) -> List[announcement_model.Announcement]:
    rows = db.list_announcements(identity)
    return [_to_model(row) for row in visibility.filter_visible(identity, rows, class_filter)]


def create_announcement(data: announcement_model.AnnouncementCreate, identity: Identity, db: DatabaseService) -> announcement_model.Announcement:
    """
    Publishes an announcement. Only administrators choose the target class;
    they default to their own label when they do not.
    """
    visibility.assert_can_create(identity, ContentKind.ANNOUNCEMENT)

    if identity.role == Role.ADMIN and data.class_label:
        target_class = data.class_label
    else:
        target_class = identity.class_label

    payload = data.model_dump(mode="json", exclude={"class_label"})
    record = {
        "id": crud.new_id("ann"),
        "author_id": identity.id,
        "author_name": identity.display_name,
        "class_label": target_class,
        **payload,
    }
    new_row = db.add_announcement(record)
    audit_service.record(db, identity, "CREATE_ANNOUNCEMENT", target_class, data.content[:80])
    return _to_model(new_row)


def update_announcement(
    announcement_id: str,
    update: announcement_model.AnnouncementUpdate,
    identity: Identity,
    db: DatabaseService,
) -> Optional[announcement_model.Announcement]:
    data = update.model_dump(mode="json", exclude_unset=True, exclude_none=True)
    # Moving an announcement to another class is an administrative act.
    if identity.role != Role.ADMIN:
        data.pop("class_label", None)

    updated = crud.update_guarded(
        ContentKind.ANNOUNCEMENT, announcement_id, identity, data,
        db.get_announcement, db.update_announcement,
    )
    if updated is None:
        return None
    audit_service.record(db, identity, "UPDATE_ANNOUNCEMENT", updated.class_label, announcement_id)
    return _to_model(updated)


def delete_announcement(announcement_id: str, identity: Identity, db: DatabaseService) -> bool:
    target_class = crud.delete_guarded(
        ContentKind.ANNOUNCEMENT, announcement_id, identity,
        db.get_announcement, db.delete_announcement,
    )
    if target_class is None:
        return False
    audit_service.record(db, identity, "DELETE_ANNOUNCEMENT", target_class, announcement_id)
    return True
