# /portal/services/class_service.py

"""
This service module is the business logic layer for the school's classes as
managed from the admin console.

It serves as a facade over the `class_helpers.crud` specialist and the
`DatabaseService`. Student counts and delegate names are not stored on the
class: they are derived from the profiles table with pandas every time the
class list is assembled, so they can never drift from the real roster.
"""

from typing import Dict, List, Optional

import pandas as pd

from ..models import admin_model
from ..models.identity_model import Identity, Role
from . import audit_service
from .class_helpers import crud
from .database_service import DatabaseService

ROSTER_COLUMNS = ["Full Name", "Email", "Role", "Class Name"]
UNASSIGNED_DELEGATE = "Non assigné"


# --- Facade Methods for CRUD Operations ---

def create_class(class_data: admin_model.SchoolClassCreate, actor: Identity, db: DatabaseService) -> admin_model.SchoolClass:
    new_class = crud.create_class(class_data, db)
    audit_service.record(db, actor, "CREATE_CLASS", new_class.name, new_class.contact_email)
    return _summaries_for([new_class], db)[0]


def update_class(class_id: str, class_update: admin_model.SchoolClassCreate, actor: Identity, db: DatabaseService) -> Optional[admin_model.SchoolClass]:
    updated = crud.update_class(class_id, class_update, db)
    if updated is None:
        return None
    audit_service.record(db, actor, "UPDATE_CLASS", updated.name, class_id)
    return _summaries_for([updated], db)[0]


def delete_class_by_id(class_id: str, actor: Identity, db: DatabaseService) -> bool:
    name = crud.delete_class_by_id(class_id, db)
    if name is None:
        return False
    audit_service.record(db, actor, "DELETE_CLASS", name, class_id)
    return True


# --- Data Assembly & Export Logic ---

def _roster_frame(db: DatabaseService) -> pd.DataFrame:
    profiles = db.get_profiles_for_roster()
    return pd.DataFrame(profiles, columns=["id", "full_name", "email", "role", "class_label", "avatar_url"])


def _summaries_for(classes: List, db: DatabaseService) -> List[admin_model.SchoolClass]:
    roster_df = _roster_frame(db)

    student_counts: Dict[str, int] = {}
    delegate_names: Dict[str, str] = {}
    if not roster_df.empty:
        students_df = roster_df[roster_df["role"] == Role.STUDENT.value]
        student_counts = students_df.groupby("class_label").size().to_dict()
        # The first responsible (alphabetically) stands as the class delegate.
        delegates_df = roster_df[roster_df["role"] == Role.RESPONSIBLE.value].sort_values("full_name")
        delegate_names = delegates_df.groupby("class_label")["full_name"].first().to_dict()

    return [
        admin_model.SchoolClass(
            id=cls.id,
            name=cls.name,
            contact_email=cls.contact_email,
            student_count=int(student_counts.get(cls.name, 0)),
            delegate_name=delegate_names.get(cls.name, UNASSIGNED_DELEGATE),
            created_at=cls.created_at,
        )
        for cls in classes
    ]


def get_all_classes_with_summary(db: DatabaseService) -> List[admin_model.SchoolClass]:
    """Every class, enriched with its student count and delegate name."""
    all_classes = db.get_all_classes()
    if not all_classes:
        return []
    return _summaries_for(all_classes, db)


def export_roster_as_csv(class_id: str, db: DatabaseService) -> str:
    """
    Generates the CSV roster (every profile attached to the class).
    Raises ValueError when the class does not exist.
    """
    class_details = db.get_class_by_id(class_id)
    if not class_details:
        raise ValueError(f"Class with ID {class_id} not found.")

    roster_df = _roster_frame(db)
    members_df = roster_df[roster_df["class_label"] == class_details.name].sort_values("full_name")

    export_data = [
        {
            "Full Name": row.full_name or "",
            "Email": row.email or "",
            "Role": row.role or Role.STUDENT.value,
            "Class Name": class_details.name,
        }
        for row in members_df.itertuples(index=False)
    ]
    df = pd.DataFrame(export_data) if export_data else pd.DataFrame(columns=ROSTER_COLUMNS)
    return df.to_csv(index=False)
