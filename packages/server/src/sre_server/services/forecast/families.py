"""Month-end forecasts for the AWS cost, Cloudflare R2 and zone families."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date

from sre_shared.contracts import (
    AwsCost,
    AwsCostMonth,
    ForecastHistory,
    ForecastResponse,
    ForecastSection,
    MetricFamily,
    R2Forecast,
    R2Month,
    R2Usage,
    ZoneForecast,
    ZoneMonth,
    ZoneUsage,
)
from sre_shared.domain import WINDOW_SIZE, MonthNameStyle, MonthSlot

from sre_server.db.repositories import UsageRepository
from sre_server.services.forecast.aggregator import (
    forecast_entities,
    forecast_fields,
    forecast_reductions,
)
from sre_server.services.forecast.models import ForecastBundle, MonthlyRows
from sre_server.services.forecast.normalizer import collect_monthly_rows

logger = logging.getLogger(__name__)

DEFAULT_MONTH_STYLES: dict[MetricFamily, MonthNameStyle] = {
    MetricFamily.AWS_COST: MonthNameStyle.FULL,
    MetricFamily.CLOUDFLARE_R2: MonthNameStyle.FULL,
    MetricFamily.CLOUDFLARE_ZONES: MonthNameStyle.ABBREVIATED,
    MetricFamily.S3_BUCKETS: MonthNameStyle.ABBREVIATED,
}

R2_FIELDS = {
    "payload_tb": lambda row: row.payload_size_tb,
    "class_a_requests": lambda row: row.class_a_requests_mm,
    "class_b_requests": lambda row: row.class_b_requests_mm,
}

ZONE_REDUCTIONS = {
    "china_bandwidth": (lambda row: row.bandwidth_tb, lambda row: row.is_china),
    "com_bandwidth": (lambda row: row.bandwidth_tb, lambda row: not row.is_china),
    "all_requests": (lambda row: row.requests_m, None),
}


@dataclass(frozen=True)
class ForecastReport:
    """Per-family bundles for one request, plus the month being forecast."""

    current: MonthSlot
    aws_cost: ForecastBundle
    cloudflare_r2: ForecastBundle
    cloudflare_zones: ForecastBundle

    def bundles(self) -> dict[MetricFamily, ForecastBundle]:
        return {
            MetricFamily.AWS_COST: self.aws_cost,
            MetricFamily.CLOUDFLARE_R2: self.cloudflare_r2,
            MetricFamily.CLOUDFLARE_ZONES: self.cloudflare_zones,
        }


async def collect_forecasts(
    repository: UsageRepository,
    *,
    today: date,
    size: int = WINDOW_SIZE,
    month_styles: Mapping[MetricFamily, MonthNameStyle] | None = None,
) -> ForecastReport:
    """
    Fetch the window of every family and forecast it.

    Queries run one after another on the repository's session. A
    ``DataFetchError`` from any month aborts the whole report.
    """
    styles = {**DEFAULT_MONTH_STYLES, **(month_styles or {})}

    async def aws_rows(year: int, month: str) -> list[AwsCost]:
        return await repository.list_aws_costs(year, month, by_cost=False)

    async def zone_rows(year: int, month: str) -> list[ZoneUsage]:
        return await repository.list_zone_usage(year, month, by_bandwidth=False)

    aws_history = await collect_monthly_rows(
        today=today,
        fetch_rows=aws_rows,
        month_style=styles[MetricFamily.AWS_COST],
        size=size,
    )
    r2_history: list[MonthlyRows[R2Usage]] = await collect_monthly_rows(
        today=today,
        fetch_rows=repository.list_r2_usage,
        month_style=styles[MetricFamily.CLOUDFLARE_R2],
        size=size,
    )
    zone_history = await collect_monthly_rows(
        today=today,
        fetch_rows=zone_rows,
        month_style=styles[MetricFamily.CLOUDFLARE_ZONES],
        size=size,
    )

    report = ForecastReport(
        current=MonthSlot.of(today),
        aws_cost=forecast_entities(
            aws_history,
            key=lambda row: row.account_name,
            value=lambda row: row.current_cost,
        ),
        cloudflare_r2=forecast_fields(r2_history, R2_FIELDS),
        cloudflare_zones=forecast_reductions(zone_history, ZONE_REDUCTIONS),
    )
    logger.debug(
        "Forecast for %d-%02d: %d AWS accounts",
        report.current.year,
        report.current.month,
        len(report.aws_cost.forecasts),
    )
    return report


def report_to_response(report: ForecastReport) -> ForecastResponse:
    """Render a ``ForecastReport`` as the forecast panel payload."""
    r2 = report.cloudflare_r2
    zones = report.cloudflare_zones
    current_month = report.current.name(MonthNameStyle.FULL)
    return ForecastResponse(
        historical=ForecastHistory(
            aws_cost=[
                AwsCostMonth(
                    month=month.slot.name(MonthNameStyle.FULL),
                    year=month.slot.year,
                    data=list(month.rows),
                )
                for month in report.aws_cost.history
            ],
            cloudflare_r2=[
                R2Month(
                    month=month.slot.name(MonthNameStyle.FULL),
                    year=month.slot.year,
                    data=month.first,
                )
                for month in r2.history
            ],
            cloudflare_zones=[
                ZoneMonth(
                    month=month.slot.name(MonthNameStyle.FULL),
                    year=month.slot.year,
                    data=list(month.rows),
                )
                for month in zones.history
            ],
        ),
        forecast=ForecastSection(
            aws_cost=dict(report.aws_cost.forecasts),
            cloudflare_r2=R2Forecast(
                payload_tb=r2.get("payload_tb"),
                class_a_requests=r2.get("class_a_requests"),
                class_b_requests=r2.get("class_b_requests"),
            ),
            cloudflare_zones=ZoneForecast(
                china_bandwidth=zones.get("china_bandwidth"),
                com_bandwidth=zones.get("com_bandwidth"),
                all_requests=zones.get("all_requests"),
            ),
        ),
        forecast_month=current_month,
        forecast_date=report.current.last_day,
        current_month=current_month,
        current_year=report.current.year,
    )


async def build_forecast_report(
    repository: UsageRepository,
    *,
    today: date,
    size: int = WINDOW_SIZE,
    month_styles: Mapping[MetricFamily, MonthNameStyle] | None = None,
) -> ForecastResponse:
    report = await collect_forecasts(
        repository, today=today, size=size, month_styles=month_styles
    )
    return report_to_response(report)


__all__ = [
    "DEFAULT_MONTH_STYLES",
    "ForecastReport",
    "build_forecast_report",
    "collect_forecasts",
    "report_to_response",
]
