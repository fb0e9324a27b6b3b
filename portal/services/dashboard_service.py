# /portal/services/dashboard_service.py

import datetime
from typing import Optional

from ..models.dashboard_model import DashboardSummary
from ..models.identity_model import Identity
from . import announcement_service, exam_service, meeting_service, poll_service, visibility
from .database_service import DatabaseService

RECENT_ANNOUNCEMENTS_LIMIT = 5
UPCOMING_EXAMS_WINDOW = datetime.timedelta(days=7)


def get_summary_data(
    identity: Identity,
    db: DatabaseService,
    class_filter: Optional[str] = None,
    now: Optional[datetime.datetime] = None,
) -> DashboardSummary:
    """
    Assembles the home page for the identity.

    The class switcher lists every class found in the identity's visible
    content, independently of the class filter currently applied.
    """
    now = now or datetime.datetime.now(datetime.timezone.utc)

    announcements = announcement_service.list_announcements(identity, db)
    exams = exam_service.list_exams(identity, db)
    meetings = meeting_service.list_meetings(identity, db)
    polls = poll_service.list_polls(identity, db)

    recent = visibility.filter_visible(identity, announcements, class_filter)[:RECENT_ANNOUNCEMENTS_LIMIT]
    upcoming = sorted(
        (
            exam for exam in visibility.filter_visible(identity, exams, class_filter)
            if now <= exam.date <= now + UPCOMING_EXAMS_WINDOW
        ),
        key=lambda exam: exam.date,
    )

    return DashboardSummary(
        recent_announcements=recent,
        upcoming_exams=upcoming,
        available_classes=visibility.available_classes(announcements, exams, meetings, polls),
    )
