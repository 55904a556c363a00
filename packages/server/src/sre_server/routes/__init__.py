"""API routes."""

from fastapi import APIRouter

from sre_server.routes.forecast import router as forecast_router
from sre_server.routes.health import router as health_router
from sre_server.routes.monitoring import router as monitoring_router
from sre_server.routes.usage import router as usage_router

monitoring_api_router = APIRouter(prefix="/api/monitoring")

# Include routers
monitoring_api_router.include_router(monitoring_router)
monitoring_api_router.include_router(usage_router)
monitoring_api_router.include_router(forecast_router)

__all__ = [
    "monitoring_api_router",
    "health_router",
]
