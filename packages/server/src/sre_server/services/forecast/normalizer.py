"""Align per-month query results into fixed forecasting windows."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from datetime import date
from typing import Any, TypeVar

from sre_shared.domain import (
    WINDOW_SIZE,
    MonthNameStyle,
    coerce_number,
    month_window,
)

from sre_server.services.forecast.models import (
    MetricObservation,
    MetricSeries,
    MonthlyRows,
)

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT")

# fetch(year, month_name) -> observation, raw value or None
FetchValue = Callable[[int, str], Awaitable[MetricObservation | Any | None]]
# fetch_rows(year, month_name) -> rows for that month
FetchRows = Callable[[int, str], Awaitable[Iterable[RowT]]]


def _observed_value(result: MetricObservation | Any | None) -> float | None:
    if isinstance(result, MetricObservation):
        return coerce_number(result.value)
    return coerce_number(result)


async def normalize_series(
    series_key: str,
    *,
    today: date,
    fetch: FetchValue,
    month_style: MonthNameStyle,
    size: int = WINDOW_SIZE,
) -> MetricSeries:
    """
    Build the window of ``series_key`` ending at ``today``'s month.

    ``fetch`` is awaited once per month, oldest first, with the month spelled
    in ``month_style``. Missing or malformed values become ``None`` slots;
    exceptions raised by ``fetch`` propagate.
    """
    slots = month_window(today, size)
    values: list[float | None] = []
    for slot in slots:
        result = await fetch(slot.year, slot.name(month_style))
        value = _observed_value(result)
        if value is None and result is not None:
            logger.debug(
                "Discarding malformed value %r for %s %d-%02d",
                result,
                series_key,
                slot.year,
                slot.month,
            )
        values.append(value)
    return MetricSeries.from_values(series_key, slots, values)


async def collect_monthly_rows(
    *,
    today: date,
    fetch_rows: FetchRows[RowT],
    month_style: MonthNameStyle,
    size: int = WINDOW_SIZE,
) -> list[MonthlyRows[RowT]]:
    """Fetch the rows of every month in the window, oldest first."""
    history: list[MonthlyRows[RowT]] = []
    for slot in month_window(today, size):
        rows = await fetch_rows(slot.year, slot.name(month_style))
        history.append(MonthlyRows(slot=slot, rows=tuple(rows)))
    return history


__all__ = ["FetchRows", "FetchValue", "collect_monthly_rows", "normalize_series"]
