# /portal/models/announcement_model.py

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field, field_validator

from .common import CamelModel, as_utc


class LinkType(str, Enum):
    MEET = "MEET"
    FORMS = "FORMS"
    DRIVE = "DRIVE"
    OTHER = "OTHER"


class AttachmentType(str, Enum):
    PDF = "PDF"
    IMAGE = "IMAGE"
    EXCEL = "EXCEL"


class AnnouncementLink(CamelModel):
    title: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    type: LinkType = LinkType.OTHER


class Attachment(CamelModel):
    name: str
    type: AttachmentType
    url: str


class AnnouncementCreate(CamelModel):
    """
    Payload for publishing an announcement. `class_label` is only honoured
    for administrators; everyone else publishes to their own class.
    """
    content: str = Field(..., min_length=1)
    class_label: Optional[str] = None
    links: List[AnnouncementLink] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    attachments: List[Attachment] = Field(default_factory=list)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Announcement content cannot be empty.")
        return v


class AnnouncementUpdate(CamelModel):
    content: Optional[str] = Field(default=None, min_length=1)
    class_label: Optional[str] = None
    links: Optional[List[AnnouncementLink]] = None
    images: Optional[List[str]] = None
    attachments: Optional[List[Attachment]] = None


class Announcement(CamelModel):
    id: str
    author_id: str
    author_name: str
    class_label: str
    content: str
    date: datetime
    links: List[AnnouncementLink] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    attachments: List[Attachment] = Field(default_factory=list)

    @field_validator("date")
    @classmethod
    def date_as_utc(cls, v: datetime) -> datetime:
        return as_utc(v)
