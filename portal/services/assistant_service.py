# /portal/services/assistant_service.py

"""
The writing helpers and the study chatbot.

The writing helpers never fail from the caller's point of view: without an
API key, or when the model errors out, the draft comes back unchanged. The
chatbot has nothing sensible to fall back to and reports the assistant as
unavailable instead.
"""

import logging
from typing import List

from ..core.exceptions import AssistantUnavailableError
from ..models.assistant_model import ChatMessage, ChatRole
from ..models.identity_model import Role
from . import gemini_service, prompt_library

logger = logging.getLogger(__name__)


async def _polish(prompt: str, draft: str, purpose: str) -> str:
    if not gemini_service.is_configured():
        logger.warning("No Gemini API key; returning the %s draft unchanged.", purpose)
        return draft
    try:
        text = await gemini_service.generate_text(prompt)
    except Exception as e:
        logger.error("Gemini call for %s failed, returning the draft: %s", purpose, e)
        return draft
    return text.strip() or draft


async def generate_announcement(draft: str, role: Role) -> str:
    author_role = prompt_library.ADMIN_AUTHOR_LABEL if role == Role.ADMIN else prompt_library.DELEGATE_AUTHOR_LABEL
    prompt = prompt_library.ANNOUNCEMENT_PROMPT.format(draft=draft, author_role=author_role)
    return await _polish(prompt, draft, "announcement")


async def reformulate_poll_question(draft: str) -> str:
    prompt = prompt_library.POLL_REFORMULATION_PROMPT.format(draft=draft)
    return await _polish(prompt, draft, "poll question")


async def chat(messages: List[ChatMessage]) -> str:
    """
    Answers the last user message given the preceding turns.
    Raises `ValueError` when the conversation does not end with a user turn.
    """
    if messages[-1].role != ChatRole.USER:
        raise ValueError("The last message must come from the user.")
    if not gemini_service.is_configured():
        raise AssistantUnavailableError("The assistant is not configured on this portal.")

    history = [
        {"role": "user" if m.role == ChatRole.USER else "model", "parts": [m.content]}
        for m in messages[:-1]
    ]
    try:
        reply = await gemini_service.chat(history, messages[-1].content, prompt_library.PEDAGOGICAL_SYSTEM_PROMPT)
    except Exception as e:
        raise AssistantUnavailableError("The assistant did not answer.") from e
    return reply.strip()
