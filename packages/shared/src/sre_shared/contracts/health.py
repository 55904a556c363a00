"""Health contract payloads."""

from pydantic import BaseModel, Field


class DependencyHealth(BaseModel):
    """Readiness status for a dependency."""

    status: str = "ok"
    detail: str | None = None


class ReadinessMetrics(BaseModel):
    database: DependencyHealth = Field(default_factory=DependencyHealth)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str
    timestamp: str
    readiness: ReadinessMetrics = Field(default_factory=ReadinessMetrics)


__all__ = [
    "DependencyHealth",
    "HealthResponse",
    "ReadinessMetrics",
]
