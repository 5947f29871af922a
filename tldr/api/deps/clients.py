from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated

import httpx
from fastapi import Depends, Request
from openai import AsyncOpenAI

from tldr.core.config import Settings
from tldr.services.fetcher import create_fetch_client
from tldr.services.summarizer import create_openai_client


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_http_client(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> AsyncIterator[httpx.AsyncClient]:
    # One client per request; nothing is pooled across requests.
    async with create_fetch_client(settings.fetch_user_agent) as client:
        yield client


def get_llm_client(settings: Annotated[Settings, Depends(get_app_settings)]) -> AsyncOpenAI | None:
    # A missing key is reported after the request itself has been validated.
    if not settings.openai_api_key:
        return None
    return create_openai_client(settings)
