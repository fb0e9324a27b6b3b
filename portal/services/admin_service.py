# /portal/services/admin_service.py

"""
User management, platform statistics and the audit journal for the admin
console. Every function here assumes the caller has already been checked
for the ADMIN role by the router dependency.
"""

import uuid
from typing import List, Optional

from ..core import security
from ..core.config import settings
from ..models import admin_model
from ..models.identity_model import Identity, ProfileRecord, Role
from . import audit_service
from .database_service import DatabaseService
from .identity_service import build_avatar_url, parse_role


def _resolve_class_label(role: Role, class_label: Optional[str]) -> str:
    """
    Administrators always belong to the administration pseudo-class, and
    nobody else may. A non-admin without a class lands in the default one.
    """
    requested = (class_label or "").strip()
    if role == Role.ADMIN:
        if requested and requested != settings.ADMIN_CLASS_LABEL:
            raise ValueError(f"Administrators must belong to '{settings.ADMIN_CLASS_LABEL}'.")
        return settings.ADMIN_CLASS_LABEL
    if requested == settings.ADMIN_CLASS_LABEL:
        raise ValueError(f"'{settings.ADMIN_CLASS_LABEL}' is reserved for administrator accounts.")
    return requested or settings.DEFAULT_CLASS_LABEL


# --- Users ---

def list_users(db: DatabaseService) -> List[ProfileRecord]:
    return [ProfileRecord.model_validate(profile) for profile in db.get_all_profiles()]


def create_user(data: admin_model.UserCreate, actor: Identity, db: DatabaseService) -> ProfileRecord:
    """Creates the credential and the profile together; the password falls back to the portal default."""
    email = data.email.strip().lower()
    if db.get_auth_user_by_email(email):
        raise ValueError("Email already registered")

    class_label = _resolve_class_label(data.role, data.class_label)
    full_name = data.full_name.strip()
    user_record = {
        "id": f"usr_{uuid.uuid4().hex[:12]}",
        "email": email,
        "hashed_password": security.get_password_hash(data.password or settings.DEFAULT_USER_PASSWORD),
    }
    profile_record = {
        "full_name": full_name,
        "email": email,
        "role": data.role.value,
        "class_label": class_label,
        "avatar_url": build_avatar_url(full_name),
    }
    profile = db.add_user_with_profile(user_record, profile_record)
    audit_service.record(db, actor, "CREATE_USER", class_label, f"{full_name} ({data.role.value})")
    return ProfileRecord.model_validate(profile)


def update_user(user_id: str, update: admin_model.UserUpdate, actor: Identity, db: DatabaseService) -> Optional[ProfileRecord]:
    data = update.model_dump(exclude_unset=True, exclude_none=True)
    if not data:
        raise ValueError("No update data provided.")

    profile = db.get_profile_by_id(user_id)
    if profile is None:
        return None

    role = data.get("role", parse_role(profile.role))
    if "role" in data or "class_label" in data:
        requested_class = data.get("class_label")
        if requested_class is None and role != Role.ADMIN and profile.class_label != settings.ADMIN_CLASS_LABEL:
            requested_class = profile.class_label
        data["class_label"] = _resolve_class_label(role, requested_class)
    if "role" in data or profile.role != role.value:
        data["role"] = role.value
    if "full_name" in data:
        data["full_name"] = data["full_name"].strip()

    updated = db.update_profile(user_id, data)
    audit_service.record(db, actor, "UPDATE_USER", updated.class_label, updated.full_name or user_id)
    return ProfileRecord.model_validate(updated)


def delete_user(user_id: str, actor: Identity, db: DatabaseService) -> bool:
    if user_id == actor.id:
        raise ValueError("Administrators cannot delete their own account.")
    profile = db.get_profile_by_id(user_id)
    target_class = profile.class_label if profile else None
    if not db.delete_auth_user(user_id):
        return False
    audit_service.record(db, actor, "DELETE_USER", target_class, user_id)
    return True


# --- Statistics & Journal ---

def get_stats(db: DatabaseService) -> admin_model.AdminStats:
    return admin_model.AdminStats(
        users=len(db.get_all_profiles()),
        classes=len(db.get_all_classes()),
        announcements=db.count_announcements(),
        exams=db.count_exams(),
        files=db.count_schedules(),
    )


def get_audit_logs(db: DatabaseService, limit: int = 100) -> List[admin_model.AuditLogEntry]:
    return [admin_model.AuditLogEntry.model_validate(entry) for entry in db.get_recent_audit_logs(limit)]
