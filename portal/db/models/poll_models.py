# /portal/db/models/poll_models.py

"""
Polls, their fixed options, and the vote ledger.

Vote counts are never stored: each option's count is the number of ledger
rows pointing at it, and the (poll_id, user_id) uniqueness constraint allows
at most one ballot per identity per poll.
"""

from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from ..base_class import Base
from ._columns import utcnow


class Poll(Base):
    __tablename__ = "polls"

    id = Column(String, primary_key=True, index=True)
    question = Column(String, nullable=False)
    class_label = Column(String, index=True, nullable=False)
    author_id = Column(String, index=True, nullable=False)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)

    options = relationship(
        "PollOption", back_populates="poll", cascade="all, delete-orphan", order_by="PollOption.position"
    )
    votes = relationship("PollVote", back_populates="poll", cascade="all, delete-orphan")


class PollOption(Base):
    __tablename__ = "poll_options"

    id = Column(String, primary_key=True, index=True)
    poll_id = Column(String, ForeignKey("polls.id"), nullable=False, index=True)
    text = Column(String, nullable=False)
    position = Column(Integer, nullable=False, default=0)

    poll = relationship("Poll", back_populates="options")


class PollVote(Base):
    __tablename__ = "poll_votes"
    __table_args__ = (UniqueConstraint("poll_id", "user_id", name="uq_poll_votes_poll_user"),)

    id = Column(String, primary_key=True, index=True)
    poll_id = Column(String, ForeignKey("polls.id"), nullable=False, index=True)
    option_id = Column(String, ForeignKey("poll_options.id"), nullable=False, index=True)
    user_id = Column(String, index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    poll = relationship("Poll", back_populates="votes")
