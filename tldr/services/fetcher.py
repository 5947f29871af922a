from __future__ import annotations

import logging

import httpx
from pydantic import HttpUrl, TypeAdapter, ValidationError

from tldr.core.errors import FetchFailedError, InvalidURLError, MissingURLError

logger = logging.getLogger(__name__)

_HTTP_URL = TypeAdapter(HttpUrl)


def validate_article_url(url: str | None) -> str:
    """Return the normalized form of a usable http(s) URL."""
    if not url or not url.strip():
        logger.warning("Summarize request without url")
        raise MissingURLError("URL is required")

    try:
        parsed = _HTTP_URL.validate_python(url)
    except ValidationError as exc:
        logger.warning("Rejected invalid url: %r", url)
        raise InvalidURLError("Invalid URL") from exc

    # Parsing drops surrounding spaces and embedded tabs/newlines; fetch what was accepted.
    return str(parsed)


async def fetch_html(url: str, client: httpx.AsyncClient) -> str:
    """
    Fetch the raw HTML for an article.

    Any transport error or non-2xx status is collapsed into FetchFailedError.
    No retry is attempted.
    """
    try:
        response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        logger.warning("Article fetch returned %s: %s", exc.response.status_code, url)
        raise FetchFailedError("Failed to fetch article") from exc
    except httpx.InvalidURL as exc:
        logger.warning("Article url rejected by http client: %r", url)
        raise InvalidURLError("Invalid URL") from exc
    except httpx.HTTPError as exc:
        logger.warning("Article fetch failed (%s): %s", type(exc).__name__, url)
        raise FetchFailedError("Failed to fetch article") from exc

    return response.text


def create_fetch_client(user_agent: str, transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        transport=transport,
        follow_redirects=True,
        headers={
            "User-Agent": user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        },
    )
