from typing import Annotated

import httpx
from fastapi import APIRouter, Depends
from openai import AsyncOpenAI
from starlette.responses import StreamingResponse

from tldr.api.deps.clients import get_app_settings, get_http_client, get_llm_client
from tldr.application.summaries import create_summary_stream
from tldr.core.config import Settings
from tldr.core.constants import STREAM_MEDIA_TYPE
from tldr.schemas.summaries import SummarizeRequest

router = APIRouter(prefix="/api", tags=["summaries"])

_PLAIN_TEXT = {"content": {"text/plain": {}}}


@router.post(
    "/summarize",
    response_class=StreamingResponse,
    responses={
        200: {**_PLAIN_TEXT, "description": "Metadata segment, delimiter, then the streamed summary."},
        400: {**_PLAIN_TEXT, "description": "Missing or invalid URL, or the article could not be fetched."},
        500: {**_PLAIN_TEXT, "description": "Summary could not be generated."},
    },
)
async def summarize(
    request: SummarizeRequest,
    settings: Annotated[Settings, Depends(get_app_settings)],
    http_client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
    llm_client: Annotated[AsyncOpenAI | None, Depends(get_llm_client)],
) -> StreamingResponse:
    body = await create_summary_stream(
        request,
        settings,
        http_client=http_client,
        llm_client=llm_client,
    )
    headers = {"Cache-Control": "no-cache", "X-Accel-Buffering": "no"}
    return StreamingResponse(body, media_type=STREAM_MEDIA_TYPE, headers=headers)
