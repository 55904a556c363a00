"""Lenient parsing for the loosely typed columns of the usage tables."""

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Any


def coerce_number(value: Any) -> float | None:
    """
    Parse a numeric cell, returning ``None`` for anything unusable.

    Upstream collectors store most figures as text, so strings such as
    ``" 12.5 "`` are accepted. Booleans, blanks, NaN and infinities are not.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        result = float(value)
    elif isinstance(value, Decimal):
        try:
            result = float(value)
        except (InvalidOperation, ValueError):
            return None
    elif isinstance(value, (str, bytes)):
        try:
            text = value.decode() if isinstance(value, bytes) else value
        except UnicodeDecodeError:
            return None
        text = text.strip()
        if not text:
            return None
        try:
            result = float(text)
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(result):
        return None
    return result


def number_or_zero(value: Any) -> float:
    """Like :func:`coerce_number` but missing values count as zero."""
    result = coerce_number(value)
    return 0.0 if result is None else result


def is_china_flag(value: Any) -> bool:
    """Interpret the ``Is_China`` column, which arrives as 1/0 or '1'/'0'."""
    if isinstance(value, str):
        return value.strip() == "1"
    if isinstance(value, (bool, int, float, Decimal)):
        return value == 1
    return False


__all__ = ["coerce_number", "is_china_flag", "number_or_zero"]
