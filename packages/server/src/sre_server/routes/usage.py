"""Current-month usage and cost routes."""

import logging
from collections.abc import Mapping
from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sre_shared.contracts import MetricFamily, UsageResponse, UsageSummaryResponse
from sre_shared.domain import MonthNameStyle, MonthSlot

from sre_server.config import get_settings
from sre_server.db.errors import DataFetchError
from sre_server.db.repositories import UsageRepository
from sre_server.db.session import Database
from sre_server.routes.depends import report_date, require_database
from sre_server.services.presentation import (
    UsageThresholds,
    ZoneThresholds,
    build_cost_rows,
    build_usage_cards,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/usage", tags=["usage"])


async def load_usage(
    repo: UsageRepository,
    *,
    today: date,
    month_styles: Mapping[MetricFamily, MonthNameStyle],
) -> UsageResponse:
    """Every usage table for ``today``'s month, each queried with its own month spelling."""
    slot = MonthSlot.of(today)

    def month(family: MetricFamily) -> str:
        return slot.name(month_styles[family])

    s3_buckets = await repo.list_s3_buckets(slot.year, month(MetricFamily.S3_BUCKETS))
    r2_thresholds = await repo.get_r2_thresholds()
    r2_usage = await repo.list_r2_usage(slot.year, month(MetricFamily.CLOUDFLARE_R2))
    zones = await repo.list_zone_usage(slot.year, month(MetricFamily.CLOUDFLARE_ZONES))
    zone_thresholds = await repo.list_zone_thresholds()
    aws_costs = await repo.list_aws_costs(slot.year, month(MetricFamily.AWS_COST))

    return UsageResponse(
        s3_buckets=s3_buckets,
        cloudflare_r2=r2_usage,
        cloudflare_r2_thresholds=r2_thresholds,
        cloudflare_zones=zones,
        cloudflare_zone_thresholds=zone_thresholds,
        aws_costs=aws_costs,
        current_month=slot.name(MonthNameStyle.FULL),
        current_year=slot.year,
    )


async def _fetch_usage(db: Database, today: date) -> UsageResponse:
    settings = get_settings()
    try:
        async with db.session() as session:
            return await load_usage(
                UsageRepository(session),
                today=today,
                month_styles=settings.month_styles,
            )
    except DataFetchError:
        logger.exception("Error fetching usage data")
        raise HTTPException(status_code=500, detail="Failed to fetch usage data")


@router.get("", response_model=UsageResponse)
async def get_usage(
    db: Database = Depends(require_database),
    today: date = Depends(report_date),
) -> UsageResponse:
    """Raw current-month usage rows and thresholds."""
    return await _fetch_usage(db, today)


@router.get("/summary", response_model=UsageSummaryResponse)
async def get_usage_summary(
    db: Database = Depends(require_database),
    today: date = Depends(report_date),
) -> UsageSummaryResponse:
    """Threshold-coloured R2 and zone cards plus the AWS cost table."""
    usage = await _fetch_usage(db, today)
    r2_cards, zone_cards = build_usage_cards(
        r2_rows=usage.cloudflare_r2,
        r2_thresholds=UsageThresholds.from_row(usage.cloudflare_r2_thresholds),
        zone_rows=usage.cloudflare_zones,
        zone_thresholds=ZoneThresholds.from_rows(usage.cloudflare_zone_thresholds),
    )
    return UsageSummaryResponse(
        r2_cards=r2_cards,
        zone_cards=zone_cards,
        cost_rows=build_cost_rows(usage.aws_costs),
        current_month=usage.current_month,
        current_year=usage.current_year,
    )
