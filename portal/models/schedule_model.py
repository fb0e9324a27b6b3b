# /portal/models/schedule_model.py

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from .common import CamelModel, as_utc


class ScheduleUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1)
    semester: Optional[str] = Field(default=None, min_length=1)


class ScheduleItem(CamelModel):
    id: str
    title: str
    class_label: str
    semester: str
    file_ref: str
    url: str
    uploaded_at: datetime
    version: int
    author_id: str

    @field_validator("uploaded_at")
    @classmethod
    def uploaded_at_as_utc(cls, v: datetime) -> datetime:
        return as_utc(v)
