"""
Health check endpoints.

Liveness says the process is up. Readiness also probes the store and reports
whether local catalog edits are still waiting to be written.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from ryunix.api.deps import Services
from ryunix.db.database import get_session

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    database: str | None = None
    sync_pending: bool | None = None
    overlay_version: int | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness probe. Does not check dependencies."""
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    services: Services,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> HealthResponse:
    """
    Readiness probe.

    Returns 503 if the store is unreachable. A pending sync does not make
    the service unready; the overlay keeps serving its in-memory state.
    """
    sync_pending = services.synchronizer.sync_pending
    version = services.overlay.version
    try:
        await session.execute(text("SELECT 1"))
    except Exception:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(
            status="not ready",
            database="disconnected",
            sync_pending=sync_pending,
            overlay_version=version,
        )
    return HealthResponse(
        status="ready",
        database="connected",
        sync_pending=sync_pending,
        overlay_version=version,
    )
