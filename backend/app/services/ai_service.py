"""
Pass-through client for the external AI text-completion endpoint.
"""
import logging
from typing import Dict, List, Optional
import httpx
from app.core.config import settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a personal finance assistant. Answer briefly and practically."
)


class AIServiceUnavailable(Exception):
    """The completion endpoint is not configured or did not answer."""


def is_configured() -> bool:
    return bool(getattr(settings, 'OPENAI_API_KEY', ''))


async def chat_completion(message: str, history: Optional[List[Dict[str, str]]] = None) -> str:
    """
    Send a chat message (with optional prior turns) and return the reply text.

    Raises AIServiceUnavailable when no API key is set or the upstream call fails.
    """
    if not is_configured():
        raise AIServiceUnavailable("AI assistant is not configured")

    messages = [{"role": "system", "content": SYSTEM_PROMPT}]
    for turn in history or []:
        if turn.get("role") in ("user", "assistant") and turn.get("content"):
            messages.append({"role": turn["role"], "content": turn["content"]})
    messages.append({"role": "user", "content": message})

    try:
        async with httpx.AsyncClient(timeout=settings.AI_TIMEOUT_SECONDS) as client:
            response = await client.post(
                settings.OPENAI_API_URL,
                headers={
                    "Authorization": f"Bearer {settings.OPENAI_API_KEY}",
                    "Content-Type": "application/json"
                },
                json={"model": settings.OPENAI_MODEL, "messages": messages}
            )
            response.raise_for_status()
            data = response.json()
    except httpx.HTTPError as e:
        logger.error(f"AI completion request failed: {e}")
        raise AIServiceUnavailable("AI assistant request failed") from e

    try:
        return data["choices"][0]["message"]["content"].strip()
    except (KeyError, IndexError, TypeError) as e:
        logger.error(f"Unexpected AI completion response shape: {e}")
        raise AIServiceUnavailable("AI assistant returned an unexpected response") from e
