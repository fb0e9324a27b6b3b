# /portal/models/forum_model.py

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .common import CamelModel


class ForumReply(CamelModel):
    id: str
    author_id: str
    author_name: str
    content: str
    created_at: datetime


class ForumPostSummary(CamelModel):
    id: str
    category_id: str
    author_id: str
    author_name: str
    class_label: str
    title: str
    content: str
    created_at: datetime
    views: int
    reply_count: int = 0


class ForumPost(ForumPostSummary):
    replies: List[ForumReply] = Field(default_factory=list)


class ForumPostCreate(CamelModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    category_id: str = "general"
    class_label: Optional[str] = None


class ForumReplyCreate(CamelModel):
    content: str = Field(..., min_length=1)
