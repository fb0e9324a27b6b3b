# /portal/services/database_helpers/row_security.py

"""
SQL counterparts of the rules in `services/visibility.py`.

These predicates are applied inside the repositories to every scoped read,
update and delete, so the store refuses out-of-scope rows even if a caller
skipped the service-level check.
"""

from sqlalchemy import false, or_, true

from ...models.identity_model import Identity, Role


def visible_clause(model, identity: Identity):
    """Rows of `model` the identity may read."""
    if identity.role == Role.ADMIN:
        return true()
    return model.class_label == identity.class_label


def modify_clause(model, identity: Identity, author_may_modify: bool = False):
    """Rows of `model` the identity may update or delete."""
    if identity.role == Role.ADMIN:
        return true()

    clauses = []
    if identity.role == Role.RESPONSIBLE:
        clauses.append(model.class_label == identity.class_label)
    if author_may_modify:
        clauses.append(model.author_id == identity.id)

    if not clauses:
        return false()
    return or_(*clauses)
