# /portal/services/database_helpers/forum_repository_sql.py

from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portal.db.models.forum_models import ForumPost, ForumReply
from portal.models.identity_model import Identity
from .row_security import modify_clause, visible_clause


class ForumRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def _commit(self):
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def list_visible_posts(self, identity: Identity) -> List[ForumPost]:
        return (
            self.db.query(ForumPost)
            .filter(visible_clause(ForumPost, identity))
            .order_by(ForumPost.created_at.desc())
            .all()
        )

    def get_visible_post(self, post_id: str, identity: Identity) -> Optional[ForumPost]:
        return self.db.query(ForumPost).filter(ForumPost.id == post_id, visible_clause(ForumPost, identity)).first()

    def get_post_by_id(self, post_id: str) -> Optional[ForumPost]:
        return self.db.query(ForumPost).filter(ForumPost.id == post_id).first()

    def get_reply_counts(self, post_ids: List[str]) -> Dict[str, int]:
        if not post_ids:
            return {}
        rows = (
            self.db.query(ForumReply.post_id, func.count(ForumReply.id))
            .filter(ForumReply.post_id.in_(post_ids))
            .group_by(ForumReply.post_id)
            .all()
        )
        return {post_id: count for post_id, count in rows}

    def increment_views(self, post_id: str) -> None:
        """Single UPDATE statement, so concurrent readers never lose a view."""
        self.db.query(ForumPost).filter(ForumPost.id == post_id).update(
            {ForumPost.views: ForumPost.views + 1}, synchronize_session=False
        )
        self._commit()

    def add_post(self, record: Dict) -> ForumPost:
        new_post = ForumPost(**record)
        self.db.add(new_post)
        self._commit()
        self.db.refresh(new_post)
        return new_post

    def add_reply(self, record: Dict) -> ForumReply:
        new_reply = ForumReply(**record)
        self.db.add(new_reply)
        self._commit()
        self.db.refresh(new_reply)
        return new_reply

    def delete_post(self, post_id: str, identity: Identity) -> bool:
        db_post = (
            self.db.query(ForumPost)
            .filter(ForumPost.id == post_id, modify_clause(ForumPost, identity, author_may_modify=True))
            .first()
        )
        if db_post is None:
            return False
        self.db.delete(db_post)
        self._commit()
        return True
