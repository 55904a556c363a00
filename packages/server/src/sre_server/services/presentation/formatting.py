"""Display strings for dashboard numbers."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

NO_DATA = "No data"

UNIT_SUFFIXES = {
    "TB": " TB",
    "MM": " MM",
    "M": " M",
}


def format_fixed(value: float, places: int = 2) -> str:
    """Fixed-point string, rounding ties away from zero like the browser's toFixed."""
    if not math.isfinite(value):
        return str(value)
    quantum = Decimal(1).scaleb(-places)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def format_percent(percent: float | None) -> str:
    if percent is None:
        return "-"
    return f"{format_fixed(percent, 1)}%"


def format_quantity(value: float | None, unit: str) -> str:
    """``12.50 TB``, ``$1,204.10`` and so on; ``No data`` when there is no value."""
    if value is None:
        return NO_DATA
    if unit == "USD":
        amount = Decimal(format_fixed(value, 2))
        return f"-${-amount:,.2f}" if amount < 0 else f"${amount:,.2f}"
    return f"{format_fixed(value, 2)}{UNIT_SUFFIXES.get(unit, f' {unit}')}"


__all__ = ["NO_DATA", "format_fixed", "format_percent", "format_quantity"]
