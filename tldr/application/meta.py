from __future__ import annotations

import logging
import time

from tldr import __version__
from tldr.core.config import Settings
from tldr.core.errors import NotReadyError
from tldr.schemas.meta import HealthResponse, ReadyResponse, StatusResponse

_START_TIME = time.monotonic()

logger = logging.getLogger(__name__)


async def health_status() -> HealthResponse:
    return HealthResponse(status="ok")


async def readiness_status(settings: Settings) -> ReadyResponse:
    # The only hard dependency we can check without spending tokens is configuration.
    if not settings.openai_api_key:
        logger.warning("readiness check failed: OPENAI_API_KEY not configured")
        raise NotReadyError("Text generation is not configured.")

    return ReadyResponse(status="ok")


async def status_snapshot() -> StatusResponse:
    uptime_seconds = time.monotonic() - _START_TIME
    logger.info("status snapshot", extra={"uptime_seconds": round(uptime_seconds, 2), "version": __version__})
    return StatusResponse(
        status="ok",
        version=__version__,
        uptime_seconds=uptime_seconds,
    )
