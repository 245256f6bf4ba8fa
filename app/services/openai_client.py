import logging

import requests

from app.core.config import settings
from app.core.exceptions import AIError

logger = logging.getLogger(__name__)


def call_chat_completion(
    messages: list,
    temperature: float = None,
    max_tokens: int = None,
) -> str:
    """
    Call the chat-completion API once. There are no retries.

    Args:
        messages: List of message dictionaries with 'role' and 'content'
        temperature: Sampling temperature (defaults to the configured value)
        max_tokens: Output bound (defaults to the configured value)

    Returns:
        str: The content of the first choice

    Raises:
        AIError: If the key is missing, the request fails, or the body is malformed.
    """
    api_key = settings.ai.openai_api_key
    if not api_key:
        logger.error("OPENAI_API_KEY is not configured. Set it in the environment.")
        raise AIError()

    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }

    payload = {
        "model": settings.ai.model_name,
        "messages": messages,
        "max_tokens": max_tokens if max_tokens is not None else settings.ai.max_tokens,
        "temperature": temperature if temperature is not None else settings.ai.temperature,
    }

    logger.info(f"Calling AI Model: {settings.ai.model_name}")
    try:
        response = requests.post(
            settings.ai.api_url,
            json=payload,
            headers=headers,
            timeout=settings.ai.timeout_seconds,
        )
    except requests.exceptions.RequestException as e:
        logger.error(f"AI service request failed: {e}")
        raise AIError() from e

    if not response.ok:
        logger.error(f"AI API Error ({response.status_code}): {response.text}")
        raise AIError()

    try:
        return response.json()["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError) as e:
        logger.error(f"Unexpected AI response body: {e}")
        raise AIError() from e
