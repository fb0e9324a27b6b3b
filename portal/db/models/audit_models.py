# /portal/db/models/audit_models.py

from sqlalchemy import Column, String, DateTime, Text

from ..base_class import Base
from ._columns import utcnow


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(String, primary_key=True, index=True)
    actor_id = Column(String, index=True, nullable=False)
    actor_name = Column(String, nullable=False)
    actor_role = Column(String, nullable=False)
    action = Column(String, index=True, nullable=False)  # e.g. CREATE_ANNOUNCEMENT
    target_class = Column(String, nullable=True)
    details = Column(Text, nullable=False, default="")
    timestamp = Column(DateTime(timezone=True), default=utcnow, index=True)
