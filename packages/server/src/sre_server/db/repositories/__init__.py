from sre_server.db.repositories.monitoring_repository import (
    MonitoringRepository,
    panel_query,
)
from sre_server.db.repositories.usage_repository import UsageRepository

__all__ = [
    "MonitoringRepository",
    "UsageRepository",
    "panel_query",
]
