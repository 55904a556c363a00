"""Database module for the dashboard."""

from sre_server.db.errors import DataFetchError
from sre_server.db.repositories import MonitoringRepository, UsageRepository
from sre_server.db.session import Database, get_database, init_database
from sre_server.db.tables import Base

__all__ = [
    # Models
    "Base",
    # Database
    "Database",
    "get_database",
    "init_database",
    # Repositories
    "MonitoringRepository",
    "UsageRepository",
    # Errors
    "DataFetchError",
]
