# /portal/services/database_helpers/poll_repository_sql.py

"""
Queries for polls and the vote ledger.

There is no mutable vote counter anywhere: counts are aggregated from
`poll_votes` at read time, and a ballot is a single row guarded by the
(poll_id, user_id) unique constraint. Concurrent votes therefore cannot lose
updates; at worst one of two racing inserts fails the constraint and is
retried as an update of the surviving row.
"""

import uuid
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from portal.db.models.poll_models import Poll, PollOption, PollVote
from portal.models.identity_model import Identity
from .row_security import modify_clause, visible_clause


class PollRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def _commit(self):
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    # --- Poll Methods ---

    def list_visible_polls(self, identity: Identity) -> List[Poll]:
        return (
            self.db.query(Poll)
            .filter(visible_clause(Poll, identity))
            .order_by(Poll.created_at.desc())
            .all()
        )

    def get_visible_poll(self, poll_id: str, identity: Identity) -> Optional[Poll]:
        return self.db.query(Poll).filter(Poll.id == poll_id, visible_clause(Poll, identity)).first()

    def get_poll_by_id(self, poll_id: str) -> Optional[Poll]:
        return self.db.query(Poll).filter(Poll.id == poll_id).first()

    def add_poll(self, poll_record: Dict, option_texts: List[str]) -> Poll:
        """Creates the poll and its options atomically."""
        new_poll = Poll(**poll_record)
        new_poll.options = [
            PollOption(id=f"opt_{uuid.uuid4().hex[:12]}", text=text, position=index)
            for index, text in enumerate(option_texts)
        ]
        self.db.add(new_poll)
        self._commit()
        self.db.refresh(new_poll)
        return new_poll

    def update_poll(self, poll_id: str, identity: Identity, data: Dict) -> Optional[Poll]:
        db_poll = self.db.query(Poll).filter(Poll.id == poll_id, modify_clause(Poll, identity)).first()
        if db_poll is None:
            return None
        for key, value in data.items():
            setattr(db_poll, key, value)
        self._commit()
        self.db.refresh(db_poll)
        return db_poll

    def delete_poll(self, poll_id: str, identity: Identity) -> bool:
        """Deletes a poll; options and ballots follow through the cascade."""
        db_poll = self.db.query(Poll).filter(Poll.id == poll_id, modify_clause(Poll, identity)).first()
        if db_poll is None:
            return False
        self.db.delete(db_poll)
        self._commit()
        return True

    # --- Vote Ledger Methods ---

    def get_vote_counts(self, poll_ids: List[str]) -> Dict[str, int]:
        """Maps option_id -> number of ballots, for every option of the given polls."""
        if not poll_ids:
            return {}
        rows = (
            self.db.query(PollVote.option_id, func.count(PollVote.id))
            .filter(PollVote.poll_id.in_(poll_ids))
            .group_by(PollVote.option_id)
            .all()
        )
        return {option_id: count for option_id, count in rows}

    def get_user_votes(self, user_id: str, poll_ids: List[str]) -> Dict[str, str]:
        """Maps poll_id -> option_id for the user's ballots."""
        if not poll_ids:
            return {}
        rows = (
            self.db.query(PollVote.poll_id, PollVote.option_id)
            .filter(PollVote.user_id == user_id, PollVote.poll_id.in_(poll_ids))
            .all()
        )
        return {poll_id: option_id for poll_id, option_id in rows}

    def _get_ballot(self, poll_id: str, user_id: str) -> Optional[PollVote]:
        return (
            self.db.query(PollVote)
            .filter(PollVote.poll_id == poll_id, PollVote.user_id == user_id)
            .first()
        )

    def cast_vote(self, poll_id: str, option_id: str, user_id: str) -> None:
        """
        Records the user's ballot for the poll, moving an existing ballot to
        the new option. Voting again for the same option changes nothing.
        """
        ballot = self._get_ballot(poll_id, user_id)
        if ballot is not None:
            if ballot.option_id != option_id:
                ballot.option_id = option_id
                self._commit()
            return

        self.db.add(PollVote(id=f"vote_{uuid.uuid4().hex[:12]}", poll_id=poll_id, option_id=option_id, user_id=user_id))
        try:
            self.db.commit()
        except IntegrityError:
            # A concurrent request inserted this user's ballot first.
            self.db.rollback()
            ballot = self._get_ballot(poll_id, user_id)
            if ballot is None:
                raise
            ballot.option_id = option_id
            self._commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
