from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from sre_shared.contracts import ZoneUsage
from sre_shared.domain import (
    MonthNameStyle,
    MonthSlot,
    coerce_number,
    is_china_flag,
    month_window,
    number_or_zero,
)


def test_month_window_is_oldest_first_and_ends_at_current_month() -> None:
    window = month_window(date(2026, 7, 19))

    assert [(slot.year, slot.month) for slot in window] == [
        (2026, 3),
        (2026, 4),
        (2026, 5),
        (2026, 6),
        (2026, 7),
    ]


def test_month_window_wraps_year_boundary_in_january() -> None:
    window = month_window(date(2026, 1, 2))

    assert [slot.name(MonthNameStyle.FULL) for slot in window] == [
        "September",
        "October",
        "November",
        "December",
        "January",
    ]
    assert [slot.year for slot in window] == [2025, 2025, 2025, 2025, 2026]


def test_month_window_custom_size_and_invalid_size() -> None:
    assert month_window(date(2026, 2, 28), size=2) == [
        MonthSlot(2026, 1),
        MonthSlot(2026, 2),
    ]
    with pytest.raises(ValueError, match="positive"):
        month_window(date(2026, 2, 28), size=0)


def test_month_name_styles_are_locale_independent() -> None:
    slot = MonthSlot(2026, 9)

    assert slot.name(MonthNameStyle.FULL) == "September"
    assert slot.name(MonthNameStyle.ABBREVIATED) == "Sep"
    assert MonthNameStyle.ABBREVIATED.format(5) == "May"
    with pytest.raises(ValueError):
        MonthNameStyle.FULL.format(13)


def test_month_slot_last_day_and_shift() -> None:
    assert MonthSlot(2024, 2).last_day == 29
    assert MonthSlot(2026, 2).last_day == 28
    assert MonthSlot(2026, 12).last_day == 31
    assert MonthSlot(2026, 1).shift(-1) == MonthSlot(2025, 12)
    assert MonthSlot(2025, 11).shift(3) == MonthSlot(2026, 2)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (12, 12.0),
        (12.5, 12.5),
        (Decimal("3.25"), 3.25),
        (" 7.5 ", 7.5),
        (b"42", 42.0),
        (b"\xff\xfe12", None),
        ("", None),
        ("   ", None),
        ("n/a", None),
        (None, None),
        (True, None),
        (float("nan"), None),
        (float("inf"), None),
        ("-inf", None),
    ],
)
def test_coerce_number(raw, expected) -> None:
    assert coerce_number(raw) == expected


def test_number_or_zero_treats_unusable_values_as_zero() -> None:
    assert number_or_zero("1.5") == 1.5
    assert number_or_zero(None) == 0.0
    assert number_or_zero("garbage") == 0.0


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (1, True),
        ("1", True),
        (" 1 ", True),
        (True, True),
        (0, False),
        ("0", False),
        (None, False),
        ("yes", False),
        (2, False),
    ],
)
def test_is_china_flag(raw, expected) -> None:
    assert is_china_flag(raw) is expected


def test_zone_contract_parses_text_columns() -> None:
    row = ZoneUsage.model_validate(
        {
            "account_name": "edge",
            "zone_name": "example.cn",
            "requests_m": "120.5",
            "bandwidth_tb": "not-a-number",
            "is_china": "1",
        }
    )

    assert row.requests_m == 120.5
    assert row.bandwidth_tb is None
    assert row.is_china is True


def test_zone_contract_treats_undecodable_bytes_as_missing() -> None:
    row = ZoneUsage.model_validate(
        {"zone_name": "example.com", "requests_m": b"\xff\xfe12", "bandwidth_tb": b"3.5"}
    )

    assert row.requests_m is None
    assert row.bandwidth_tb == 3.5
    assert row.is_china is False
