"""Health check routes."""

import logging

from fastapi import APIRouter, Response, status
from sqlalchemy import text
from sre_shared.contracts import DependencyHealth, HealthResponse, ReadinessMetrics

from sre_server.config import get_settings
from sre_server.db.session import get_database
from sre_server.shared_utils.time_utils import utc_now

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


async def _check_database_readiness() -> DependencyHealth:
    try:
        db = get_database()
    except RuntimeError as exc:
        return DependencyHealth(status="error", detail=str(exc))
    if not db.is_connected:
        return DependencyHealth(status="error", detail="Database not connected")

    try:
        async with db.session() as session:
            await session.execute(text("SELECT 1"))
    except Exception as exc:
        logger.warning("Database readiness probe failed: %s", exc)
        return DependencyHealth(
            status="error",
            detail=f"Database readiness probe failed: {exc}",
        )

    return DependencyHealth(status="ok")


async def _build_health_response() -> tuple[HealthResponse, bool]:
    settings = get_settings()
    db_readiness = await _check_database_readiness()
    ready = db_readiness.status == "ok"
    payload = HealthResponse(
        status="ok" if ready else "degraded",
        version=settings.version,
        timestamp=utc_now().isoformat(),
        readiness=ReadinessMetrics(database=db_readiness),
    )
    return payload, ready


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Liveness endpoint with dependency status details.

    This endpoint always returns 200 when the API process is alive.
    See /ready for strict readiness signaling.
    """
    payload, _ = await _build_health_response()
    return payload


@router.get("/ready", response_model=HealthResponse)
async def readiness_check(response: Response) -> HealthResponse:
    """Readiness endpoint for load balancers and traffic gating."""
    payload, ready = await _build_health_response()
    if not ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return payload
