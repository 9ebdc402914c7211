"""Health check endpoint for infrastructure verification."""

from fastapi import APIRouter
from pydantic import BaseModel

from taxengine import __version__
from taxengine.tax.loader import RulesLoader

router = APIRouter(prefix="/api", tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    supported_years: list[int]


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report service status and the tax years rules are loaded for.

    Returns:
        HealthResponse; the engine has no external dependencies, so status
        is always "ok" once the rules tables imported.
    """
    return HealthResponse(
        status="ok",
        version=__version__,
        supported_years=list(RulesLoader().supported_years()),
    )
