"""Live status panel routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sre_shared.contracts import FailuresResponse, ServerStatus, ZbrainUrlStatus

from sre_server.db.errors import DataFetchError
from sre_server.db.repositories import MonitoringRepository
from sre_server.db.session import Database
from sre_server.routes.depends import require_database
from sre_server.services.presentation import is_url_down, summarize_failures

logger = logging.getLogger(__name__)

router = APIRouter(tags=["monitoring"])


async def _load_panels(db: Database) -> dict[str, list[ServerStatus]]:
    try:
        async with db.session() as session:
            return await MonitoringRepository(session).list_all_panels()
    except DataFetchError:
        logger.exception("Error fetching server monitoring data")
        raise HTTPException(
            status_code=500, detail="Failed to fetch server monitoring data"
        )


@router.get("/servers", response_model=dict[str, list[ServerStatus]])
async def list_servers(
    db: Database = Depends(require_database),
) -> dict[str, list[ServerStatus]]:
    """Rows of every status panel, keyed by panel name in rotation order."""
    return await _load_panels(db)


@router.get("/failures", response_model=FailuresResponse)
async def list_failures(db: Database = Depends(require_database)) -> FailuresResponse:
    """Failing rows of every panel, with the details column pre-rendered."""
    panels = await _load_panels(db)
    return summarize_failures(panels)


@router.get("/zbrain", response_model=list[ZbrainUrlStatus])
async def list_zbrain_status(
    db: Database = Depends(require_database),
) -> list[ZbrainUrlStatus]:
    """Zbrain URL checks, down URLs first and flagged."""
    try:
        async with db.session() as session:
            rows = await MonitoringRepository(session).list_zbrain_status()
    except DataFetchError:
        logger.exception("Error fetching Zbrain status")
        raise HTTPException(status_code=500, detail="Failed to fetch Zbrain status data")
    return [row.model_copy(update={"down": is_url_down(row)}) for row in rows]
