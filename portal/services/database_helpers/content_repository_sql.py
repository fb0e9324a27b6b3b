# /portal/services/database_helpers/content_repository_sql.py

"""
Queries shared by the class-scoped content tables (announcements, exams,
meetings, schedules). Every read, update and delete is filtered through the
row-level predicates of `row_security`, with the calling identity passed in
explicitly.
"""

from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from portal.db.models.content_models import ScheduleItem
from portal.models.identity_model import Identity
from .row_security import modify_clause, visible_clause


class ContentRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def _commit(self):
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    # --- Reads ---

    def list_visible(self, model, identity: Identity, order_by) -> List:
        return self.db.query(model).filter(visible_clause(model, identity)).order_by(order_by).all()

    def get_visible(self, model, record_id: str, identity: Identity):
        return (
            self.db.query(model)
            .filter(model.id == record_id, visible_clause(model, identity))
            .first()
        )

    def get_by_id(self, model, record_id: str):
        """Unscoped lookup, used only to tell 'missing' apart from 'forbidden'."""
        return self.db.query(model).filter(model.id == record_id).first()

    def count(self, model) -> int:
        return self.db.query(func.count(model.id)).scalar() or 0

    # --- Writes ---

    def add(self, model, record: Dict):
        new_record = model(**record)
        self.db.add(new_record)
        self._commit()
        self.db.refresh(new_record)
        return new_record

    def update_scoped(self, model, record_id: str, identity: Identity, data: Dict, author_may_modify: bool = False):
        """
        Updates a row only if it satisfies the identity's modify predicate.
        Returns the refreshed row, or None when nothing matched.
        """
        db_record = (
            self.db.query(model)
            .filter(model.id == record_id, modify_clause(model, identity, author_may_modify))
            .first()
        )
        if db_record is None:
            return None
        for key, value in data.items():
            setattr(db_record, key, value)
        self._commit()
        self.db.refresh(db_record)
        return db_record

    def delete_scoped(self, model, record_id: str, identity: Identity, author_may_modify: bool = False) -> bool:
        db_record = (
            self.db.query(model)
            .filter(model.id == record_id, modify_clause(model, identity, author_may_modify))
            .first()
        )
        if db_record is None:
            return False
        self.db.delete(db_record)
        self._commit()
        return True

    # --- Schedule Helpers ---

    def get_latest_schedule_version(self, title: str, class_label: str) -> int:
        latest = (
            self.db.query(func.max(ScheduleItem.version))
            .filter(ScheduleItem.title == title, ScheduleItem.class_label == class_label)
            .scalar()
        )
        return latest or 0

    def add_schedule_version(self, record: Dict, max_attempts: int = 3) -> ScheduleItem:
        """
        Inserts the next version of a (title, class) timetable. A concurrent
        upload that claims the same version trips the unique constraint, and
        the insert is retried with a freshly computed version.
        """
        for attempt in range(1, max_attempts + 1):
            version = self.get_latest_schedule_version(record["title"], record["class_label"]) + 1
            new_record = ScheduleItem(version=version, **record)
            self.db.add(new_record)
            try:
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                if attempt == max_attempts:
                    raise
                continue
            except SQLAlchemyError:
                self.db.rollback()
                raise
            self.db.refresh(new_record)
            return new_record
