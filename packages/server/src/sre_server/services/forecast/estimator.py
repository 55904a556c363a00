"""
Month-end forecast estimator.

A deliberately simple heuristic: the mean of the window, scaled by the most
recent month-over-month growth, with a band of 1.5 population standard
deviations either side. The low end is floored at zero. Degenerate input
(no usable values, a single value, a zero or negative previous month) yields
well-formed results instead of errors.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal

from sre_shared.contracts import ForecastResult

from sre_server.services.forecast.models import MetricSeries

logger = logging.getLogger(__name__)

BAND_WIDTH = 1.5
PRECISION = Decimal("0.01")


def usable_values(values: Iterable[float | None]) -> list[float]:
    """Drop missing, NaN and infinite entries, keeping order."""
    return [
        float(value) for value in values if value is not None and math.isfinite(value)
    ]


def growth_rate(values: Sequence[float]) -> float:
    """Growth between the last two usable values; 0 when undefined."""
    if len(values) < 2:
        return 0.0
    previous, recent = values[-2], values[-1]
    if previous <= 0:
        return 0.0
    return (recent - previous) / previous


def mean_and_deviation(values: Sequence[float]) -> tuple[float, float]:
    """
    Mean and population standard deviation in plain float arithmetic.

    Sums that exceed the float range become infinite instead of raising.
    """
    count = len(values)
    mean = sum(values) / count
    variance = sum((value - mean) * (value - mean) for value in values) / count
    return mean, math.sqrt(variance)


def round_half_up(value: float) -> float:
    """Round to cents, half away from zero on the exact binary value."""
    if not math.isfinite(value):
        return value
    return float(Decimal(value).quantize(PRECISION, rounding=ROUND_HALF_UP))


def estimate(series: MetricSeries | Iterable[float | None]) -> ForecastResult:
    """Project the month-end value of one series."""
    raw = series.values if isinstance(series, MetricSeries) else series
    values = usable_values(raw)
    if not values:
        return ForecastResult(high=0.0, mean=0.0, low=0.0)

    mean, std_dev = mean_and_deviation(values)
    growth = growth_rate(values)

    trend_mean = mean * (1 + growth)
    high = trend_mean + BAND_WIDTH * std_dev
    low = trend_mean - BAND_WIDTH * std_dev
    low = low if low > 0 else 0.0

    if isinstance(series, MetricSeries):
        logger.debug(
            "Forecast %s: n=%d mean=%.4f std=%.4f growth=%.4f",
            series.series_key,
            len(values),
            mean,
            std_dev,
            growth,
        )

    return ForecastResult(
        high=round_half_up(high),
        mean=round_half_up(trend_mean),
        low=round_half_up(low),
    )


__all__ = ["estimate", "growth_rate", "mean_and_deviation", "round_half_up", "usable_values"]
