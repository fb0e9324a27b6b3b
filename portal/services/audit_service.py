# /portal/services/audit_service.py

import logging
import uuid
from typing import Optional

from ..models.identity_model import Identity
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


def record(db: DatabaseService, actor: Identity, action: str, target_class: Optional[str], details: str = "") -> None:
    """Appends an entry to the audit journal shown in the admin console."""
    db.add_audit_log({
        "id": f"log_{uuid.uuid4().hex[:12]}",
        "actor_id": actor.id,
        "actor_name": actor.display_name,
        "actor_role": actor.role.value,
        "action": action,
        "target_class": target_class,
        "details": details,
    })
    logger.info("%s by %s (%s) on %s", action, actor.display_name, actor.role.value, target_class)
