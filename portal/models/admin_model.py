# /portal/models/admin_model.py

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from .common import CamelModel
from .identity_model import Role


class UserCreate(CamelModel):
    email: EmailStr
    full_name: str = Field(..., min_length=2)
    role: Role = Role.STUDENT
    class_label: Optional[str] = None
    # Falls back to the configured default password when omitted.
    password: Optional[str] = Field(default=None, min_length=6)


class UserUpdate(CamelModel):
    full_name: Optional[str] = Field(default=None, min_length=2)
    role: Optional[Role] = None
    class_label: Optional[str] = None


class SchoolClassCreate(CamelModel):
    name: str = Field(..., min_length=1)


class SchoolClass(CamelModel):
    id: str
    name: str
    contact_email: str
    student_count: int = 0
    delegate_name: Optional[str] = None
    created_at: datetime


class AdminStats(CamelModel):
    users: int
    classes: int
    announcements: int
    exams: int
    files: int


class AuditLogEntry(CamelModel):
    id: str
    actor_name: str
    actor_role: str
    action: str
    target_class: Optional[str] = None
    details: str
    timestamp: datetime
