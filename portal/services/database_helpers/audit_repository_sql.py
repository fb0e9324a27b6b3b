# /portal/services/database_helpers/audit_repository_sql.py

from typing import Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portal.db.models.audit_models import AuditLog


class AuditRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def add_log(self, record: Dict) -> AuditLog:
        entry = AuditLog(**record)
        self.db.add(entry)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return entry

    def get_recent_logs(self, limit: int = 100) -> List[AuditLog]:
        return self.db.query(AuditLog).order_by(AuditLog.timestamp.desc()).limit(limit).all()
