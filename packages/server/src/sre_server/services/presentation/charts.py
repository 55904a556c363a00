"""Chart series for the forecast panel."""

from __future__ import annotations

from sre_shared.contracts import (
    ChartPoint,
    ForecastChart,
    ForecastMarkers,
    ForecastResult,
    MetricFamily,
)
from sre_shared.domain import MonthNameStyle

from sre_server.services.forecast import ForecastReport, MetricSeries
from sre_server.services.forecast.models import MetricObservation
from sre_server.services.presentation.formatting import format_quantity

MONTH_END_LABEL = "Month End"

# series key -> (label, unit)
SERIES_LABELS: dict[MetricFamily, dict[str, tuple[str, str]]] = {
    MetricFamily.CLOUDFLARE_R2: {
        "payload_tb": ("R2 Payload Size", "TB"),
        "class_a_requests": ("R2 Class A Requests", "MM"),
        "class_b_requests": ("R2 Class B Requests", "MM"),
    },
    MetricFamily.CLOUDFLARE_ZONES: {
        "all_requests": ("All Requests", "M"),
        "com_bandwidth": (".com Bandwidth", "TB"),
        "china_bandwidth": ("China Bandwidth", "TB"),
    },
}
AWS_COST_UNIT = "USD"


def _point_label(observation: MetricObservation) -> str:
    return f"{observation.slot.name(MonthNameStyle.ABBREVIATED)} {observation.year}"


def _point(
    label: str, value: float | None, unit: str, *, partial: bool = False
) -> ChartPoint:
    return ChartPoint(
        label=label,
        value=value,
        display=format_quantity(value, unit),
        partial=partial,
    )


def build_forecast_chart(
    series: MetricSeries,
    forecast: ForecastResult,
    *,
    family: MetricFamily,
    label: str,
    unit: str,
    current_actual: float | None = None,
) -> ForecastChart:
    """
    Chart for one series: elapsed months, the partial current month, and the
    high/mean/low markers at the month-end point.
    """
    current = series.current
    actual = current.value if current_actual is None else current_actual
    return ForecastChart(
        family=family,
        series_key=series.series_key,
        label=label,
        unit=unit,
        historical=[
            _point(_point_label(obs), obs.value, unit) for obs in series.elapsed
        ],
        current=_point(_point_label(current), actual, unit, partial=True),
        forecast=ForecastMarkers(
            label=MONTH_END_LABEL,
            high=_point(MONTH_END_LABEL, forecast.high, unit),
            mean=_point(MONTH_END_LABEL, forecast.mean, unit),
            low=_point(MONTH_END_LABEL, forecast.low, unit),
        ),
    )


def build_forecast_charts(report: ForecastReport) -> list[ForecastChart]:
    """Charts for every series of every family, AWS accounts first."""
    charts: list[ForecastChart] = []
    for family, bundle in report.bundles().items():
        labels = SERIES_LABELS.get(family, {})
        for key, series in bundle.series.items():
            label, unit = labels.get(key, (key, AWS_COST_UNIT))
            charts.append(
                build_forecast_chart(
                    series,
                    bundle.get(key),
                    family=family,
                    label=label,
                    unit=unit,
                )
            )
    return charts


__all__ = ["MONTH_END_LABEL", "SERIES_LABELS", "build_forecast_chart", "build_forecast_charts"]
