# /portal/models/meeting_model.py

import datetime as dt
from enum import Enum
from typing import Optional

from pydantic import Field

from .common import CamelModel


class Platform(str, Enum):
    GOOGLE_MEET = "Google Meet"
    ZOOM = "Zoom"
    TEAMS = "Teams"
    OTHER = "Autre"


class MeetingCreate(CamelModel):
    title: str = Field(..., min_length=1)
    date: dt.date
    time: str = Field(..., min_length=1, description="Local start time, e.g. '14:30'.")
    link: str = Field(..., min_length=1)
    platform: Platform = Platform.GOOGLE_MEET


class MeetingUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1)
    date: Optional[dt.date] = None
    time: Optional[str] = Field(default=None, min_length=1)
    link: Optional[str] = Field(default=None, min_length=1)
    platform: Optional[Platform] = None


class Meeting(CamelModel):
    id: str
    title: str
    class_label: str
    date: dt.date
    time: str
    link: str
    platform: Platform
    author_id: str
    author_name: str
