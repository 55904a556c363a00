"""Month-end forecast routes."""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sre_shared.contracts import ForecastChartsResponse, ForecastResponse
from sre_shared.domain import MonthNameStyle

from sre_server.config import get_settings
from sre_server.db.errors import DataFetchError
from sre_server.db.repositories import UsageRepository
from sre_server.db.session import Database
from sre_server.routes.depends import report_date, require_database
from sre_server.services.forecast import (
    ForecastReport,
    collect_forecasts,
    report_to_response,
)
from sre_server.services.presentation import build_forecast_charts

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/forecast", tags=["forecast"])


async def _collect(db: Database, today: date) -> ForecastReport:
    settings = get_settings()
    try:
        async with db.session() as session:
            return await collect_forecasts(
                UsageRepository(session),
                today=today,
                size=settings.forecast_window_months,
                month_styles=settings.month_styles,
            )
    except DataFetchError:
        logger.exception("Error fetching forecast data")
        raise HTTPException(status_code=500, detail="Failed to fetch forecast data")


@router.get("", response_model=ForecastResponse)
async def get_forecast(
    db: Database = Depends(require_database),
    today: date = Depends(report_date),
) -> ForecastResponse:
    """Historical window, per-series forecasts and the month being forecast."""
    report = await _collect(db, today)
    return report_to_response(report)


@router.get("/charts", response_model=ForecastChartsResponse)
async def get_forecast_charts(
    db: Database = Depends(require_database),
    today: date = Depends(report_date),
) -> ForecastChartsResponse:
    report = await _collect(db, today)
    return ForecastChartsResponse(
        charts=build_forecast_charts(report),
        forecast_month=report.current.name(MonthNameStyle.FULL),
        current_year=report.current.year,
    )
