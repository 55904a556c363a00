"""Pure domain helpers shared by the server and clients."""

from sre_shared.domain.months import (
    MONTH_NAMES,
    WINDOW_SIZE,
    MonthNameStyle,
    MonthSlot,
    month_window,
)
from sre_shared.domain.numbers import coerce_number, is_china_flag, number_or_zero

__all__ = [
    "MONTH_NAMES",
    "WINDOW_SIZE",
    "MonthNameStyle",
    "MonthSlot",
    "month_window",
    "coerce_number",
    "is_china_flag",
    "number_or_zero",
]
