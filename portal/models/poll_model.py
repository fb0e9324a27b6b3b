# /portal/models/poll_model.py

from typing import List, Optional

from pydantic import ConfigDict, Field, field_validator

from .common import CamelModel


class PollOption(CamelModel):
    id: str
    text: str
    votes: int = 0


class Poll(CamelModel):
    """
    A poll as returned to a specific identity. `total_votes` is always the
    sum of the option counts; `user_vote_option_id` is the caller's ballot.
    """
    id: str
    question: str
    class_label: str
    options: List[PollOption]
    author_id: str
    active: bool
    total_votes: int
    user_vote_option_id: Optional[str] = None


class PollCreate(CamelModel):
    question: str = Field(..., min_length=1)
    options: List[str] = Field(..., min_length=2)

    @field_validator("question")
    @classmethod
    def question_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("The poll question cannot be empty.")
        return v.strip()

    @field_validator("options")
    @classmethod
    def options_not_blank(cls, v: List[str]) -> List[str]:
        if any(not option.strip() for option in v):
            raise ValueError("Poll options cannot be empty.")
        return [option.strip() for option in v]


class PollUpdate(CamelModel):
    """Options are fixed at creation time, so only these two fields may change."""
    model_config = ConfigDict(extra="forbid")

    question: Optional[str] = Field(default=None, min_length=1)
    active: Optional[bool] = None


class VoteRequest(CamelModel):
    option_id: str
