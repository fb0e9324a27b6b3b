# /portal/models/exam_model.py

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from .common import CamelModel, as_utc


class ExamCreate(CamelModel):
    subject: str = Field(..., min_length=1)
    date: datetime
    duration: str = ""
    room: str = ""
    notes: Optional[str] = None

    @field_validator("date")
    @classmethod
    def normalise_date(cls, v: datetime) -> datetime:
        return as_utc(v)


class ExamUpdate(CamelModel):
    subject: Optional[str] = Field(default=None, min_length=1)
    date: Optional[datetime] = None
    duration: Optional[str] = None
    room: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("date")
    @classmethod
    def normalise_date(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v) if v is not None else v


class Exam(CamelModel):
    id: str
    subject: str
    class_label: str
    date: datetime
    duration: str
    room: str
    notes: Optional[str] = None
    author_id: str

    @field_validator("date")
    @classmethod
    def date_as_utc(cls, v: datetime) -> datetime:
        return as_utc(v)
