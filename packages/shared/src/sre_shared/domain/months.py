"""Calendar month helpers for monthly usage tables."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from enum import StrEnum

# English names, independent of the process locale (calendar.month_name is not).
MONTH_NAMES: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

WINDOW_SIZE = 5


class MonthNameStyle(StrEnum):
    """How an upstream table spells the month column."""

    FULL = "full"
    ABBREVIATED = "abbreviated"

    def format(self, month: int) -> str:
        if not 1 <= month <= 12:
            raise ValueError(f"month must be in 1..12, got {month}")
        name = MONTH_NAMES[month - 1]
        if self is MonthNameStyle.ABBREVIATED:
            return name[:3]
        return name


@dataclass(frozen=True, order=True)
class MonthSlot:
    """One calendar month inside a forecasting window."""

    year: int
    month: int

    def name(self, style: MonthNameStyle = MonthNameStyle.FULL) -> str:
        return style.format(self.month)

    @property
    def last_day(self) -> int:
        return calendar.monthrange(self.year, self.month)[1]

    def shift(self, months: int) -> MonthSlot:
        index = self.year * 12 + (self.month - 1) + months
        return MonthSlot(year=index // 12, month=index % 12 + 1)

    @classmethod
    def of(cls, day: date) -> MonthSlot:
        return cls(year=day.year, month=day.month)


def month_window(today: date, size: int = WINDOW_SIZE) -> list[MonthSlot]:
    """
    Return the ``size`` months ending at ``today``'s month, oldest first.

    The last slot is the current (partial) month; year boundaries wrap, so
    January 2026 with the default size yields Sep 2025 .. Jan 2026.
    """
    if size < 1:
        raise ValueError(f"window size must be positive, got {size}")
    current = MonthSlot.of(today)
    return [current.shift(-offset) for offset in range(size - 1, -1, -1)]


__all__ = [
    "MONTH_NAMES",
    "WINDOW_SIZE",
    "MonthNameStyle",
    "MonthSlot",
    "month_window",
]
