# /portal/services/poll_service.py

"""
Polls and voting.

Options are fixed when a poll is created. Votes live in a ledger with one
row per (poll, identity); option counts and the poll total are aggregated
from that ledger whenever a poll is assembled, so `total_votes` always
equals the sum of the option counts.
"""

from typing import Dict, List, Optional

from ..core.exceptions import RecordNotFoundError
from ..models import poll_model
from ..models.identity_model import Identity
from . import audit_service, visibility
from .content_helpers import crud
from .database_service import DatabaseService
from .visibility import ContentKind


def _assemble_poll(row, vote_counts: Dict[str, int], user_vote: Optional[str]) -> poll_model.Poll:
    options = [
        poll_model.PollOption(id=option.id, text=option.text, votes=vote_counts.get(option.id, 0))
        for option in row.options
    ]
    return poll_model.Poll(
        id=row.id,
        question=row.question,
        class_label=row.class_label,
        options=options,
        author_id=row.author_id,
        active=row.active,
        total_votes=sum(option.votes for option in options),
        user_vote_option_id=user_vote,
    )


def _assemble_polls(rows: List, identity: Identity, db: DatabaseService) -> List[poll_model.Poll]:
    poll_ids = [row.id for row in rows]
    vote_counts = db.get_vote_counts(poll_ids)
    user_votes = db.get_user_votes(identity.id, poll_ids)
    return [_assemble_poll(row, vote_counts, user_votes.get(row.id)) for row in rows]


def list_polls(identity: Identity, db: DatabaseService, class_filter: Optional[str] = None) -> List[poll_model.Poll]:
    rows = visibility.filter_visible(identity, db.list_polls(identity), class_filter)
    return _assemble_polls(rows, identity, db)


def get_poll(poll_id: str, identity: Identity, db: DatabaseService) -> Optional[poll_model.Poll]:
    row = db.get_visible_poll(poll_id, identity)
    if row is None:
        return None
    return _assemble_polls([row], identity, db)[0]


def create_poll(data: poll_model.PollCreate, identity: Identity, db: DatabaseService) -> poll_model.Poll:
    visibility.assert_can_create(identity, ContentKind.POLL)
    poll_record = {
        "id": crud.new_id("poll"),
        "question": data.question,
        "class_label": identity.class_label,
        "author_id": identity.id,
        "active": True,
    }
    new_row = db.add_poll(poll_record, data.options)
    audit_service.record(db, identity, "CREATE_POLL", identity.class_label, data.question)
    return _assemble_poll(new_row, {}, None)


def update_poll(poll_id: str, update: poll_model.PollUpdate, identity: Identity, db: DatabaseService) -> Optional[poll_model.Poll]:
    """Changes the question and/or open state. Options are immutable."""
    data = update.model_dump(exclude_unset=True, exclude_none=True)
    updated = crud.update_guarded(ContentKind.POLL, poll_id, identity, data, db.get_poll, db.update_poll)
    if updated is None:
        return None
    audit_service.record(db, identity, "UPDATE_POLL", updated.class_label, updated.question)
    return _assemble_polls([updated], identity, db)[0]


def delete_poll(poll_id: str, identity: Identity, db: DatabaseService) -> bool:
    target_class = crud.delete_guarded(ContentKind.POLL, poll_id, identity, db.get_poll, db.delete_poll)
    if target_class is None:
        return False
    audit_service.record(db, identity, "DELETE_POLL", target_class, poll_id)
    return True


def vote(poll_id: str, option_id: str, identity: Identity, db: DatabaseService) -> poll_model.Poll:
    """
    Casts (or moves) the identity's ballot and returns the refreshed poll.

    Raises `RecordNotFoundError` when the poll is not visible to the
    identity, and `ValueError` when the poll is closed or the option belongs
    to another poll.
    """
    row = db.get_visible_poll(poll_id, identity)
    if row is None:
        raise RecordNotFoundError("Poll", poll_id)
    if not row.active:
        raise ValueError("This poll is closed.")
    if option_id not in {option.id for option in row.options}:
        raise ValueError(f"Option {option_id} does not belong to poll {poll_id}.")

    db.cast_vote(poll_id, option_id, identity.id)
    return get_poll(poll_id, identity, db)
