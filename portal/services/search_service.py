# /portal/services/search_service.py

"""
Global search across the content visible to the caller.

Matching is a case-insensitive substring test over a few text fields per
kind of record; each kind contributes a bounded number of hits.
"""

from typing import Callable, Iterable, List, Optional, TypeVar

from ..models.dashboard_model import SearchResults
from ..models.identity_model import Identity
from . import announcement_service, exam_service, meeting_service, schedule_service
from .database_service import DatabaseService

T = TypeVar("T")

EXAM_LIMIT = 5
ANNOUNCEMENT_LIMIT = 5
SCHEDULE_LIMIT = 3
MEETING_LIMIT = 3


def _matches(needle: str, *fields: Optional[str]) -> bool:
    return any(needle in (field or "").lower() for field in fields)


def _take(records: Iterable[T], predicate: Callable[[T], bool], limit: int) -> List[T]:
    hits = []
    for record in records:
        if predicate(record):
            hits.append(record)
            if len(hits) == limit:
                break
    return hits


def search(query: str, identity: Identity, db: DatabaseService, class_filter: Optional[str] = None) -> SearchResults:
    needle = query.strip().lower()
    if not needle:
        return SearchResults()

    return SearchResults(
        exams=_take(
            exam_service.list_exams(identity, db, class_filter),
            lambda e: _matches(needle, e.subject, e.room, e.class_label),
            EXAM_LIMIT,
        ),
        announcements=_take(
            announcement_service.list_announcements(identity, db, class_filter),
            lambda a: _matches(needle, a.content, a.author_name),
            ANNOUNCEMENT_LIMIT,
        ),
        schedules=_take(
            schedule_service.list_schedules(identity, db, class_filter),
            lambda s: _matches(needle, s.title, s.semester),
            SCHEDULE_LIMIT,
        ),
        meetings=_take(
            meeting_service.list_meetings(identity, db, class_filter),
            lambda m: _matches(needle, m.title, m.platform.value),
            MEETING_LIMIT,
        ),
    )
