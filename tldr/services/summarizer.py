from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Any

from openai import APIError, AsyncOpenAI

from tldr.core.config import Settings
from tldr.core.constants import LENGTH_PROFILES, SUMMARY_TEMPERATURE, SYSTEM_PROMPT
from tldr.core.errors import ConfigurationError, SummaryFailedError
from tldr.schemas.summaries import SummaryLength

logger = logging.getLogger(__name__)


class SummarizationError(SummaryFailedError):
    pass


def create_openai_client(settings: Settings) -> AsyncOpenAI:
    if not settings.openai_api_key:
        raise ConfigurationError("Missing OPENAI_API_KEY.")

    return AsyncOpenAI(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
    )


def build_messages(text: str, length: SummaryLength) -> list[dict[str, str]]:
    profile = LENGTH_PROFILES[length]
    return [
        {"role": "system", "content": f"{SYSTEM_PROMPT}\n\n{profile.instruction}"},
        {
            "role": "user",
            "content": f"Please provide a clear and concise summary of the following article:\n\n{text}",
        },
    ]


async def _iter_deltas(stream: Any) -> AsyncIterator[str]:
    try:
        async for chunk in stream:
            if not chunk.choices:
                continue
            delta = getattr(chunk.choices[0].delta, "content", None)
            if isinstance(delta, str) and delta:
                yield delta
    finally:
        # Releases the upstream connection even when the response is abandoned.
        await stream.close()


async def start_summary_stream(
    text: str,
    length: SummaryLength,
    *,
    client: AsyncOpenAI,
    model: str,
) -> AsyncIterator[str]:
    """
    Open a streaming completion and return an iterator over its text fragments.

    The request is sent before this coroutine returns, so a failure to start
    generation raises here rather than after the response has begun.
    """
    profile = LENGTH_PROFILES[length]
    logger.info("Starting summary stream", extra={"length": length.value, "max_tokens": profile.max_tokens})

    try:
        stream = await client.chat.completions.create(
            model=model,
            messages=build_messages(text, length),  # type: ignore[arg-type]
            temperature=SUMMARY_TEMPERATURE,
            max_tokens=profile.max_tokens,
            stream=True,
        )
    except APIError as exc:
        raise SummarizationError("Failed to generate summary") from exc

    return _iter_deltas(stream)
