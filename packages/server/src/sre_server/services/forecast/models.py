"""Request-scoped forecasting data structures."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from sre_shared.contracts import ForecastResult
from sre_shared.domain import WINDOW_SIZE, MonthSlot

RowT = TypeVar("RowT")


@dataclass(frozen=True)
class MetricObservation:
    """One monthly value of a series; ``value`` is None when no usable row exists."""

    series_key: str
    year: int
    month: int
    value: float | None = None

    @property
    def slot(self) -> MonthSlot:
        return MonthSlot(year=self.year, month=self.month)


@dataclass(frozen=True)
class MetricSeries:
    """
    Fixed-size window of observations for one series, oldest first.

    The final slot is the current, possibly partial, month.
    """

    series_key: str
    observations: tuple[MetricObservation, ...]
    size: int = WINDOW_SIZE

    def __post_init__(self) -> None:
        if len(self.observations) != self.size:
            raise ValueError(
                f"series {self.series_key!r} needs {self.size} observations, "
                f"got {len(self.observations)}"
            )
        slots = [obs.slot for obs in self.observations]
        if len(set(slots)) != len(slots):
            raise ValueError(f"series {self.series_key!r} repeats a month")

    @classmethod
    def from_values(
        cls,
        series_key: str,
        slots: Sequence[MonthSlot],
        values: Sequence[float | None],
    ) -> MetricSeries:
        if len(slots) != len(values):
            raise ValueError("slots and values must have the same length")
        observations = tuple(
            MetricObservation(
                series_key=series_key, year=slot.year, month=slot.month, value=value
            )
            for slot, value in zip(slots, values)
        )
        return cls(series_key=series_key, observations=observations, size=len(slots))

    @property
    def values(self) -> list[float | None]:
        return [obs.value for obs in self.observations]

    @property
    def elapsed(self) -> tuple[MetricObservation, ...]:
        return self.observations[:-1]

    @property
    def current(self) -> MetricObservation:
        return self.observations[-1]

    def __getitem__(self, index: int) -> MetricObservation:
        return self.observations[index]

    def __len__(self) -> int:
        return len(self.observations)


@dataclass(frozen=True)
class MonthlyRows(Generic[RowT]):
    """Rows fetched for one month of the window."""

    slot: MonthSlot
    rows: tuple[RowT, ...] = ()

    @property
    def first(self) -> RowT | None:
        return self.rows[0] if self.rows else None


@dataclass(frozen=True)
class ForecastBundle:
    """Forecasts keyed by series, with the series and raw months that produced them."""

    forecasts: dict[str, ForecastResult] = field(default_factory=dict)
    series: dict[str, MetricSeries] = field(default_factory=dict)
    history: tuple[MonthlyRows, ...] = ()

    def __getitem__(self, key: str) -> ForecastResult:
        return self.forecasts[key]

    def get(self, key: str) -> ForecastResult:
        """Forecast for ``key``; zeroed when the key is unknown."""
        return self.forecasts.get(key, ForecastResult())

    def keys(self) -> list[str]:
        return list(self.forecasts)
