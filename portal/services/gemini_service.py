# /portal/services/gemini_service.py

"""
Thin async wrappers around the Google Gemini SDK.

The client is configured lazily on first use, so the application starts
without an API key; calling any generative function without one raises
`AssistantUnavailableError`.
"""

import logging
from typing import Dict, List, Optional

import google.generativeai as genai
from google.generativeai.types import GenerationConfig

from ..core.config import settings
from ..core.exceptions import AssistantUnavailableError

logger = logging.getLogger(__name__)

_configured_key: Optional[str] = None


def is_configured() -> bool:
    return bool(settings.GOOGLE_API_KEY)


def _get_model(system_instruction: Optional[str] = None) -> genai.GenerativeModel:
    global _configured_key
    if not is_configured():
        raise AssistantUnavailableError("GOOGLE_API_KEY is not set; the assistant is disabled.")
    if _configured_key != settings.GOOGLE_API_KEY:
        genai.configure(api_key=settings.GOOGLE_API_KEY)
        _configured_key = settings.GOOGLE_API_KEY
    return genai.GenerativeModel(settings.GEMINI_MODEL, system_instruction=system_instruction)


# --- CORE GENERATIVE FUNCTIONS ---

async def generate_text(prompt: str, temperature: float = 0.5) -> str:
    """The workhorse for single-shot text generation."""
    model = _get_model()
    try:
        config = GenerationConfig(temperature=temperature)
        response = await model.generate_content_async(prompt, generation_config=config)
        if not response.parts:
            raise ValueError("AI model returned an empty response.")
        return response.text
    except Exception as e:
        logger.error("generate_text failed with Gemini API: %s", e)
        raise


async def chat(history: List[Dict], message: str, system_instruction: str, temperature: float = 0.7) -> str:
    """
    Continues a conversation. `history` holds the previous turns in the SDK's
    `{"role": "user"|"model", "parts": [text]}` shape; `message` is the new
    user turn.
    """
    model = _get_model(system_instruction=system_instruction)
    try:
        session = model.start_chat(history=history)
        response = await session.send_message_async(message, generation_config=GenerationConfig(temperature=temperature))
        if not response.parts:
            raise ValueError("AI model returned an empty response.")
        return response.text
    except Exception as e:
        logger.error("chat failed with Gemini API (%d previous turns): %s", len(history), e)
        raise
