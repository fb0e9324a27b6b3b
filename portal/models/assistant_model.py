# /portal/models/assistant_model.py

from enum import Enum
from typing import List

from pydantic import Field

from .common import CamelModel


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(CamelModel):
    role: ChatRole
    content: str = Field(..., min_length=1)


class ChatRequest(CamelModel):
    """The whole conversation so far; the last message must come from the user."""
    messages: List[ChatMessage] = Field(..., min_length=1)


class ChatResponse(CamelModel):
    reply: str


class DraftRequest(CamelModel):
    draft: str = Field(..., min_length=1)


class DraftResponse(CamelModel):
    text: str
