# /portal/db/models/content_models.py

"""
Class-scoped content tables. Every row carries exactly one `class_label`,
which is the column the row-level scoping predicates filter on.
"""

from sqlalchemy import Column, String, Integer, DateTime, Date, Text, JSON, UniqueConstraint

from ..base_class import Base
from ._columns import utcnow


class Announcement(Base):
    __tablename__ = "announcements"

    id = Column(String, primary_key=True, index=True)
    author_id = Column(String, index=True, nullable=False)
    author_name = Column(String, nullable=False)
    class_label = Column(String, index=True, nullable=False)
    content = Column(Text, nullable=False)
    date = Column(DateTime(timezone=True), default=utcnow, index=True)
    links = Column(JSON, nullable=False, default=list)
    images = Column(JSON, nullable=False, default=list)
    attachments = Column(JSON, nullable=False, default=list)


class Exam(Base):
    __tablename__ = "exams"

    id = Column(String, primary_key=True, index=True)
    subject = Column(String, nullable=False)
    class_label = Column(String, index=True, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    duration = Column(String, nullable=False, default="")
    room = Column(String, nullable=False, default="")
    notes = Column(Text, nullable=True)
    author_id = Column(String, index=True, nullable=False)


class Meeting(Base):
    __tablename__ = "meetings"

    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    class_label = Column(String, index=True, nullable=False)
    date = Column(Date, nullable=False, index=True)
    time = Column(String, nullable=False)
    link = Column(String, nullable=False)
    platform = Column(String, nullable=False)
    author_id = Column(String, index=True, nullable=False)
    author_name = Column(String, nullable=False)


class ScheduleItem(Base):
    __tablename__ = "schedules"
    __table_args__ = (UniqueConstraint("title", "class_label", "version", name="uq_schedules_title_class_version"),)

    id = Column(String, primary_key=True, index=True)
    title = Column(String, index=True, nullable=False)
    class_label = Column(String, index=True, nullable=False)
    semester = Column(String, nullable=False)
    file_ref = Column(String, nullable=False)
    url = Column(String, nullable=False)
    uploaded_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    version = Column(Integer, nullable=False, default=1)
    author_id = Column(String, index=True, nullable=False)
