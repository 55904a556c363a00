"""Run the estimator across the series of one metric family."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypeVar

from sre_shared.domain import number_or_zero

from sre_server.services.forecast.estimator import estimate
from sre_server.services.forecast.models import ForecastBundle, MetricSeries, MonthlyRows

RowT = TypeVar("RowT")

KeyGetter = Callable[[RowT], Any]
ValueGetter = Callable[[RowT], float | None]
RowFilter = Callable[[RowT], bool]


def _entity_key(raw: Any) -> str | None:
    if raw is None:
        return None
    key = str(raw).strip()
    return key or None


def discover_entities(
    history: Sequence[MonthlyRows[RowT]], key: KeyGetter[RowT]
) -> list[str]:
    """Every entity seen in any month of the window, sorted."""
    seen: set[str] = set()
    for month in history:
        for row in month.rows:
            entity = _entity_key(key(row))
            if entity is not None:
                seen.add(entity)
    return sorted(seen)


def entity_series(
    history: Sequence[MonthlyRows[RowT]],
    entity: str,
    *,
    key: KeyGetter[RowT],
    value: ValueGetter[RowT],
) -> MetricSeries:
    """One slot per month holding the entity's value, or None when it has no row."""
    values: list[float | None] = []
    for month in history:
        match = next((row for row in month.rows if _entity_key(key(row)) == entity), None)
        values.append(value(match) if match is not None else None)
    return MetricSeries.from_values(entity, [month.slot for month in history], values)


def forecast_entities(
    history: Sequence[MonthlyRows[RowT]],
    *,
    key: KeyGetter[RowT],
    value: ValueGetter[RowT],
) -> ForecastBundle:
    """Forecast every entity discovered in ``history`` (e.g. one per AWS account)."""
    bundle = ForecastBundle(history=tuple(history))
    for entity in discover_entities(history, key):
        series = entity_series(history, entity, key=key, value=value)
        bundle.series[entity] = series
        bundle.forecasts[entity] = estimate(series)
    return bundle


def forecast_fields(
    history: Sequence[MonthlyRows[RowT]],
    fields: Mapping[str, ValueGetter[RowT]],
) -> ForecastBundle:
    """
    Forecast named sub-metrics of a single-row family.

    Each month contributes its first row; months without a row give None.
    """
    slots = [month.slot for month in history]
    bundle = ForecastBundle(history=tuple(history))
    for name, value in fields.items():
        values = [
            value(month.first) if month.first is not None else None
            for month in history
        ]
        series = MetricSeries.from_values(name, slots, values)
        bundle.series[name] = series
        bundle.forecasts[name] = estimate(series)
    return bundle


def reduce_monthly(
    history: Sequence[MonthlyRows[RowT]],
    value: ValueGetter[RowT],
    *,
    where: RowFilter[RowT] | None = None,
) -> list[float]:
    """Sum ``value`` over each month's rows; missing or non-numeric values count as 0."""
    totals: list[float] = []
    for month in history:
        total = 0.0
        for row in month.rows:
            if where is not None and not where(row):
                continue
            total += number_or_zero(value(row))
        totals.append(total)
    return totals


def forecast_reductions(
    history: Sequence[MonthlyRows[RowT]],
    reductions: Mapping[str, tuple[ValueGetter[RowT], RowFilter[RowT] | None]],
) -> ForecastBundle:
    """Reduce each month to one scalar per named reduction, then forecast it."""
    slots = [month.slot for month in history]
    bundle = ForecastBundle(history=tuple(history))
    for name, (value, where) in reductions.items():
        totals: list[float | None] = list(reduce_monthly(history, value, where=where))
        series = MetricSeries.from_values(name, slots, totals)
        bundle.series[name] = series
        bundle.forecasts[name] = estimate(series)
    return bundle


__all__ = [
    "discover_entities",
    "entity_series",
    "forecast_entities",
    "forecast_fields",
    "forecast_reductions",
    "reduce_monthly",
]
