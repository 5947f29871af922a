from __future__ import annotations

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from tldr.core.errors import AppError

logger = logging.getLogger(__name__)


async def handle_app_error(request: Request, exc: AppError) -> PlainTextResponse:
    # Log only server-side failures here. Client errors are logged at the source.
    if exc.status_code >= 500:
        logger.error("%s", exc.detail)
    return PlainTextResponse(exc.public_detail or exc.detail, status_code=exc.status_code)


async def handle_validation_error(request: Request, _exc: RequestValidationError) -> PlainTextResponse:
    logger.warning("Invalid request: %s %s", request.method, request.url.path)
    return PlainTextResponse("Invalid request", status_code=400)
