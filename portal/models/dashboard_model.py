# /portal/models/dashboard_model.py

from typing import List

from pydantic import Field

from .common import CamelModel
from .announcement_model import Announcement
from .exam_model import Exam
from .meeting_model import Meeting
from .schedule_model import ScheduleItem


class DashboardSummary(CamelModel):
    """
    Defines the data contract for the home page. Every collection has
    already been passed through the caller's visibility filter.
    """
    recent_announcements: List[Announcement] = Field(..., description="The latest visible announcements, newest first.")
    upcoming_exams: List[Exam] = Field(..., description="Visible exams in the next seven days, soonest first.")
    available_classes: List[str] = Field(..., description="Distinct class labels, for the administrator's class switcher.")


class SearchResults(CamelModel):
    exams: List[Exam] = Field(default_factory=list)
    announcements: List[Announcement] = Field(default_factory=list)
    schedules: List[ScheduleItem] = Field(default_factory=list)
    meetings: List[Meeting] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.exams or self.announcements or self.schedules or self.meetings)
