# /portal/services/content_helpers/crud.py

"""
The update/delete sequence every class-scoped content service follows:

1. Look the record up without scoping, so a missing record (404) can be
   told apart from a forbidden one (403).
2. Check the identity against the shared mutation rule.
3. Run the scoped write, which re-applies the same rule in SQL. A scoped
   write that matches nothing after the check passed is still a denial.
"""

import uuid
from typing import Callable, Dict, Optional

from ...models.identity_model import Identity
from .. import visibility
from ..visibility import ContentKind


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def update_guarded(
    kind: ContentKind,
    record_id: str,
    identity: Identity,
    data: Dict,
    db_get: Callable,
    db_update: Callable,
):
    """Returns the updated row, or None when no such record exists."""
    if not data:
        raise ValueError("No update data provided.")

    existing = db_get(record_id)
    if existing is None:
        return None
    visibility.assert_can_modify(identity, kind, existing)

    updated = db_update(record_id, identity, data)
    if updated is None:
        raise PermissionError(f"You are not allowed to modify this {kind.value}.")
    return updated


def delete_guarded(
    kind: ContentKind,
    record_id: str,
    identity: Identity,
    db_get: Callable,
    db_delete: Callable,
) -> Optional[str]:
    """Returns the deleted record's class label, or None when no such record exists."""
    existing = db_get(record_id)
    if existing is None:
        return None
    visibility.assert_can_modify(identity, kind, existing)
    target_class = existing.class_label

    if not db_delete(record_id, identity):
        raise PermissionError(f"You are not allowed to delete this {kind.value}.")
    return target_class
