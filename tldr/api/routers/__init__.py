"""API routers."""

from tldr.api.routers.meta import router as meta_router
from tldr.api.routers.summaries import router as summaries_router

__all__ = ["meta_router", "summaries_router"]
