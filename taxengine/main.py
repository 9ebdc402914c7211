"""FastAPI application entry point with lifespan management."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from taxengine import __version__
from taxengine.api.health import router as health_router
from taxengine.api.middleware import RequestContextMiddleware
from taxengine.api.returns import router as returns_router
from taxengine.core.config import settings
from taxengine.core.logging import configure_logging, get_logger
from taxengine.core.sentry import init_sentry

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle.

    Startup:
        - Configure structured logging
        - Initialize Sentry error tracking
    """
    configure_logging()
    logger.info("application_starting", environment=settings.environment)

    sentry_enabled = init_sentry()
    logger.info("sentry_configured", enabled=sentry_enabled)

    yield

    logger.info("application_stopping")


app = FastAPI(
    title="Tax Engine",
    description="Federal individual income tax computation (Form 1040)",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(RequestContextMiddleware)

app.include_router(health_router)
app.include_router(returns_router)
