"""API module exports."""

from taxengine.api.health import router as health_router
from taxengine.api.returns import router as returns_router

__all__ = [
    "health_router",
    "returns_router",
]
