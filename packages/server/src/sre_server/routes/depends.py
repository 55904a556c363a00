"""Shared FastAPI dependencies for route handlers."""

from datetime import date

from fastapi import HTTPException

from sre_server.config import get_settings
from sre_server.db.session import Database, get_database
from sre_server.shared_utils.time_utils import today_in


def require_database() -> Database:
    """FastAPI dependency that returns the database or raises 503."""
    try:
        return get_database()
    except RuntimeError:
        raise HTTPException(status_code=503, detail="Database not available")


def report_date() -> date:
    """Today's date in the configured reporting timezone."""
    return today_in(get_settings().report_tz)
