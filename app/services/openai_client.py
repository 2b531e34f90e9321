"""Thin OpenAI client wrapper for jacket recommendation calls."""

from __future__ import annotations

import logging
from typing import Any

from openai import APIConnectionError, APIStatusError, AsyncOpenAI, OpenAIError

from app.config import settings
from app.domain import ConfigurationError, UpstreamServiceError

logger = logging.getLogger("jacketscore.openai")

_client: AsyncOpenAI | None = None


def get_client() -> AsyncOpenAI:
    """Return a singleton AsyncOpenAI client configured from settings."""

    global _client
    if _client is None:
        if not settings.openai_api_key:
            raise ConfigurationError("OpenAI API key not configured")
        _client = AsyncOpenAI(
            api_key=settings.openai_api_key,
            timeout=settings.openai_timeout,
            max_retries=0,
        )
        logger.info("Initialized OpenAI client for model %s", settings.openai_model)
    return _client


async def complete_prompt(prompt: str, *, system_message: str | None = None) -> str:
    """Send a single-turn prompt to OpenAI and return the trimmed text."""

    messages: list[dict[str, Any]] = []
    if system_message:
        messages.append({"role": "system", "content": system_message})
    messages.append({"role": "user", "content": prompt})

    logger.debug(
        "Payload being sent to OpenAI: model=%s messages=%s", settings.openai_model, messages
    )
    client = get_client()
    try:
        response = await client.chat.completions.create(
            model=settings.openai_model,
            messages=messages,
            temperature=settings.openai_temperature,
            max_tokens=settings.openai_max_tokens,
        )
    except APIStatusError as exc:
        logger.error("OpenAI API error: status=%s message=%s", exc.status_code, exc.message)
        raise UpstreamServiceError(exc.message, status_code=exc.status_code) from exc
    except APIConnectionError as exc:
        logger.error("OpenAI connection failed: %s", exc)
        raise UpstreamServiceError(str(exc), status_code=500) from exc
    except OpenAIError as exc:
        logger.exception("Unexpected OpenAI failure")
        raise UpstreamServiceError(str(exc), status_code=500) from exc

    if not response.choices:
        raise UpstreamServiceError("AI response contained no choices", status_code=500)
    content = response.choices[0].message.content or ""
    return content.strip()


__all__ = ["complete_prompt", "get_client"]
