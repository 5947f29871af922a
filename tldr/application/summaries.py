from __future__ import annotations

import logging
from collections.abc import AsyncIterator

import httpx
from openai import AsyncOpenAI

from tldr.core.config import Settings
from tldr.core.errors import AppError, ConfigurationError, SummaryFailedError
from tldr.schemas.summaries import ArticleMetadata, SummarizeRequest
from tldr.services.composer import compose_summary_stream
from tldr.services.extractor import extract_metadata, extract_text, parse_html
from tldr.services.fetcher import fetch_html, validate_article_url
from tldr.services.summarizer import start_summary_stream

logger = logging.getLogger(__name__)


async def create_summary_stream(
    request: SummarizeRequest,
    settings: Settings,
    *,
    http_client: httpx.AsyncClient,
    llm_client: AsyncOpenAI | None,
) -> AsyncIterator[bytes]:
    """
    Run everything that can still change the response status, then hand back the body.

    Validation, fetching, extraction and the start of generation all happen
    before this returns. Failures past that point abort the stream instead.
    """
    url = validate_article_url(request.url)
    if llm_client is None:
        raise ConfigurationError("Missing OPENAI_API_KEY.")

    html = await fetch_html(url, http_client)

    try:
        document = parse_html(html)
        text = extract_text(document)
        metadata: ArticleMetadata | None = None
        if settings.stream_metadata:
            metadata = extract_metadata(document, url, text)

        fragments = await start_summary_stream(
            text,
            request.length,
            client=llm_client,
            model=settings.openai_model,
        )
    except AppError:
        raise
    except Exception as exc:
        logger.error("Unexpected error while preparing summary for %s: %s", url, exc)
        raise SummaryFailedError("Failed to generate summary") from exc

    logger.info("Summarizing article", extra={"url": url, "length": request.length.value, "chars": len(text)})
    return compose_summary_stream(fragments, metadata)
