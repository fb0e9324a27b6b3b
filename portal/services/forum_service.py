# /portal/services/forum_service.py

from typing import List, Optional

from ..core.exceptions import RecordNotFoundError
from ..models import forum_model
from ..models.identity_model import Identity, Role
from . import audit_service, visibility
from .content_helpers import crud
from .database_service import DatabaseService
from .visibility import ContentKind


def _to_summary(row, reply_count: int) -> forum_model.ForumPostSummary:
    summary = forum_model.ForumPostSummary.model_validate(row)
    summary.reply_count = reply_count
    return summary


def list_posts(identity: Identity, db: DatabaseService, class_filter: Optional[str] = None) -> List[forum_model.ForumPostSummary]:
    rows = visibility.filter_visible(identity, db.list_forum_posts(identity), class_filter)
    reply_counts = db.get_forum_reply_counts([row.id for row in rows])
    return [_to_summary(row, reply_counts.get(row.id, 0)) for row in rows]


def get_post(post_id: str, identity: Identity, db: DatabaseService) -> Optional[forum_model.ForumPost]:
    """Opens a thread: counts the view, then returns the post with its replies."""
    if db.get_visible_forum_post(post_id, identity) is None:
        return None
    db.increment_forum_views(post_id)
    row = db.get_visible_forum_post(post_id, identity)
    post = forum_model.ForumPost.model_validate(row)
    post.reply_count = len(post.replies)
    return post


def create_post(data: forum_model.ForumPostCreate, identity: Identity, db: DatabaseService) -> forum_model.ForumPost:
    visibility.assert_can_create(identity, ContentKind.FORUM_POST)
    if identity.role == Role.ADMIN and data.class_label:
        target_class = data.class_label
    else:
        target_class = identity.class_label

    record = {
        "id": crud.new_id("post"),
        "category_id": data.category_id,
        "author_id": identity.id,
        "author_name": identity.display_name,
        "class_label": target_class,
        "title": data.title.strip(),
        "content": data.content.strip(),
    }
    new_row = db.add_forum_post(record)
    audit_service.record(db, identity, "CREATE_FORUM_POST", target_class, record["title"])
    return forum_model.ForumPost.model_validate(new_row)


def add_reply(post_id: str, data: forum_model.ForumReplyCreate, identity: Identity, db: DatabaseService) -> forum_model.ForumReply:
    """Anyone who can see a thread may reply to it."""
    if db.get_visible_forum_post(post_id, identity) is None:
        raise RecordNotFoundError("Forum post", post_id)
    new_row = db.add_forum_reply({
        "id": crud.new_id("rep"),
        "post_id": post_id,
        "author_id": identity.id,
        "author_name": identity.display_name,
        "content": data.content.strip(),
    })
    return forum_model.ForumReply.model_validate(new_row)


def delete_post(post_id: str, identity: Identity, db: DatabaseService) -> bool:
    target_class = crud.delete_guarded(
        ContentKind.FORUM_POST, post_id, identity, db.get_forum_post, db.delete_forum_post
    )
    if target_class is None:
        return False
    audit_service.record(db, identity, "DELETE_FORUM_POST", target_class, post_id)
    return True
