# /portal/services/visibility.py

"""
The role/class-scoped visibility and authorization model.

Every piece of class-scoped content (announcements, exams, meetings, polls,
schedules, forum posts) is governed by the same two rules:

* Visibility: an administrator sees every class, optionally narrowed to a
  single class by an override; everyone else sees only their own class.
* Mutation: an administrator may edit or delete anything; a responsible may
  edit or delete records of their own class; for announcements and forum
  posts, the author may always edit or delete their own record.

Creation rights differ per kind of content and are listed in
`CREATE_RIGHTS`. The repositories enforce the same rules again as SQL
predicates (see `database_helpers/row_security.py`); the checks in this
module decide what the API offers, the store decides what actually happens.
"""

from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Sequence, TypeVar

from ..models.identity_model import Identity, Role

T = TypeVar("T")

# Admin override value meaning "every class".
ALL_CLASSES = "ALL"


class ContentKind(str, Enum):
    ANNOUNCEMENT = "announcement"
    EXAM = "exam"
    MEETING = "meeting"
    POLL = "poll"
    SCHEDULE = "schedule"
    FORUM_POST = "forum_post"


# Administrators do not originate pedagogical content (exams, meetings,
# polls, timetables); they can still manage it once it exists.
CREATE_RIGHTS: Dict[ContentKind, FrozenSet[Role]] = {
    ContentKind.ANNOUNCEMENT: frozenset({Role.RESPONSIBLE, Role.ADMIN}),
    ContentKind.EXAM: frozenset({Role.RESPONSIBLE}),
    ContentKind.MEETING: frozenset({Role.RESPONSIBLE}),
    ContentKind.POLL: frozenset({Role.RESPONSIBLE}),
    ContentKind.SCHEDULE: frozenset({Role.RESPONSIBLE}),
    ContentKind.FORUM_POST: frozenset({Role.ADMIN, Role.RESPONSIBLE, Role.STUDENT}),
}

# Kinds where plain authorship grants edit/delete regardless of role.
AUTHOR_MAY_MODIFY: FrozenSet[ContentKind] = frozenset({ContentKind.ANNOUNCEMENT, ContentKind.FORUM_POST})


def _class_of(record: Any) -> Optional[str]:
    if isinstance(record, dict):
        return record.get("class_label")
    return getattr(record, "class_label", None)


def _author_of(record: Any) -> Optional[str]:
    if isinstance(record, dict):
        return record.get("author_id")
    return getattr(record, "author_id", None)


def is_admin_filter_active(admin_class_filter: Optional[str]) -> bool:
    return bool(admin_class_filter) and admin_class_filter != ALL_CLASSES


def filter_visible(identity: Identity, records: Iterable[T], admin_class_filter: Optional[str] = None) -> List[T]:
    """
    Returns the records the identity may see, preserving input order.

    `admin_class_filter` is only meaningful for administrators: `None` or
    `"ALL"` returns everything, any other value narrows to that class.
    """
    if identity.role == Role.ADMIN:
        if not is_admin_filter_active(admin_class_filter):
            return list(records)
        return [r for r in records if _class_of(r) == admin_class_filter]
    return [r for r in records if _class_of(r) == identity.class_label]


def is_visible(identity: Identity, record: Any) -> bool:
    return identity.role == Role.ADMIN or _class_of(record) == identity.class_label


def can_create(identity: Identity, kind: ContentKind) -> bool:
    return identity.role in CREATE_RIGHTS[kind]


def can_modify(identity: Identity, kind: ContentKind, record: Any) -> bool:
    """Update/delete rule shared by every content kind."""
    if identity.role == Role.ADMIN:
        return True
    if identity.role == Role.RESPONSIBLE and _class_of(record) == identity.class_label:
        return True
    if kind in AUTHOR_MAY_MODIFY and _author_of(record) == identity.id:
        return True
    return False


def assert_can_create(identity: Identity, kind: ContentKind) -> None:
    if not can_create(identity, kind):
        raise PermissionError(f"Role {identity.role.value} may not create {kind.value} records.")


def assert_can_modify(identity: Identity, kind: ContentKind, record: Any) -> None:
    if not can_modify(identity, kind, record):
        raise PermissionError(f"You are not allowed to modify this {kind.value}.")


def available_classes(*collections: Sequence[Any]) -> List[str]:
    """Sorted, distinct, non-empty class labels across the given collections."""
    labels = {_class_of(record) for collection in collections for record in collection}
    return sorted(label for label in labels if label)
