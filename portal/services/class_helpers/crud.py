# /portal/services/class_helpers/crud.py

import re
import uuid
from typing import Optional

from ...core.config import settings
from ...db.models.identity_models import SchoolClass
from ...models import admin_model
from ..database_service import DatabaseService

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def build_contact_email(class_name: str) -> str:
    """'Licence 2 - Info' -> 'licence.2...info@<CLASS_EMAIL_DOMAIN>'"""
    local_part = _NON_ALNUM.sub(".", class_name.lower())
    return f"{local_part}@{settings.CLASS_EMAIL_DOMAIN}"


def _normalize_name(name: str) -> str:
    normalized = name.strip()
    if not normalized:
        raise ValueError("Class name must not be blank.")
    if normalized == settings.ADMIN_CLASS_LABEL:
        raise ValueError(f"'{settings.ADMIN_CLASS_LABEL}' is reserved for administrator accounts.")
    return normalized


def create_class(class_data: admin_model.SchoolClassCreate, db: DatabaseService) -> SchoolClass:
    name = _normalize_name(class_data.name)
    if db.get_class_by_name(name):
        raise ValueError(f"A class named '{name}' already exists.")
    return db.add_class({
        "id": f"cls_{uuid.uuid4().hex[:12]}",
        "name": name,
        "contact_email": build_contact_email(name),
    })


def update_class(class_id: str, class_update: admin_model.SchoolClassCreate, db: DatabaseService) -> Optional[SchoolClass]:
    """
    Renames a class. The contact email follows the new name, and so do the
    profiles and content that were filed under the old one.
    """
    if not db.get_class_by_id(class_id):
        return None
    name = _normalize_name(class_update.name)
    existing = db.get_class_by_name(name)
    if existing and existing.id != class_id:
        raise ValueError(f"A class named '{name}' already exists.")
    return db.rename_class(class_id, {"name": name, "contact_email": build_contact_email(name)})


def delete_class_by_id(class_id: str, db: DatabaseService) -> Optional[str]:
    """Returns the deleted class's name, or None when it does not exist."""
    db_class = db.get_class_by_id(class_id)
    if not db_class:
        return None
    name = db_class.name
    db.delete_class(class_id)
    return name
