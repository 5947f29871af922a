from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from tldr.api.deps.clients import get_app_settings
from tldr.application.meta import health_status, readiness_status, status_snapshot
from tldr.core.config import Settings
from tldr.schemas.meta import HealthResponse, ReadyResponse, StatusResponse

router = APIRouter(prefix="/meta", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return await health_status()


@router.get("/ready", response_model=ReadyResponse)
async def ready(settings: Annotated[Settings, Depends(get_app_settings)]) -> ReadyResponse:
    return await readiness_status(settings)


@router.get("/status", response_model=StatusResponse)
async def status() -> StatusResponse:
    return await status_snapshot()
