from __future__ import annotations

import math
from datetime import date

import pytest
from sre_shared.contracts import ForecastResult
from sre_shared.domain import month_window

from sre_server.services.forecast import MetricSeries, estimate, growth_rate, round_half_up
from sre_server.services.forecast.estimator import usable_values


def _series(values: list[float | None], key: str = "X") -> MetricSeries:
    return MetricSeries.from_values(key, month_window(date(2026, 5, 10)), values)


def test_estimate_is_deterministic_for_series_and_raw_sequences() -> None:
    values = [12.0, None, 15.5, 14.0, 16.25]

    first = estimate(values)
    second = estimate(values)

    assert first == second
    assert estimate(_series(values)) == first


@pytest.mark.parametrize("values", [[], [None, None, None, None, None]])
def test_no_usable_values_yield_zeroed_forecast(values) -> None:
    assert estimate(values) == ForecastResult(high=0.0, mean=0.0, low=0.0)


def test_single_point_series_has_no_growth_and_no_band() -> None:
    result = estimate(_series([None, None, None, None, 42.0]))

    assert result == ForecastResult(high=42.0, mean=42.0, low=42.0)


def test_low_is_floored_at_zero() -> None:
    result = estimate([100, 100, 100, 100, 1])

    # growth -0.99 collapses the trend mean below the band width
    assert result.low == 0.0
    assert result.mean == pytest.approx(0.8)
    assert result.high == pytest.approx(60.2)


@pytest.mark.parametrize(
    ("values", "expected"),
    [
        ([0, 50], ForecastResult(high=62.5, mean=25.0, low=0.0)),
        ([-10, 50], ForecastResult(high=65.0, mean=20.0, low=0.0)),
    ],
)
def test_growth_rate_guard_for_non_positive_previous_value(values, expected) -> None:
    assert growth_rate(values) == 0.0
    assert estimate(values) == expected


def test_growth_rate_uses_last_two_usable_values() -> None:
    assert growth_rate([]) == 0.0
    assert growth_rate([5.0]) == 0.0
    assert growth_rate([100.0, 130.0, 132.0]) == pytest.approx(2 / 130)


def test_outputs_are_rounded_to_two_places() -> None:
    result = estimate([34, 33, 33])

    assert result.mean == 33.33
    assert result.high == 34.04
    assert result.low == 32.63


def test_rounding_is_half_up_on_exact_binary_value() -> None:
    assert round_half_up(0.125) == 0.13
    assert round_half_up(-0.125) == -0.13
    # 2.675 is stored just below the tie
    assert round_half_up(2.675) == 2.67
    assert estimate([0.125]) == ForecastResult(high=0.13, mean=0.13, low=0.13)


def test_nan_and_infinite_values_are_dropped() -> None:
    assert usable_values([None, math.nan, 10.0, math.inf, -math.inf, 0.0]) == [10.0, 0.0]
    assert estimate([math.nan, 10.0, math.inf]) == ForecastResult(
        high=10.0, mean=10.0, low=10.0
    )


def test_values_beyond_float_range_degrade_instead_of_raising() -> None:
    result = estimate([1e308, 1e308, None, None, 1e308])

    assert result.mean == math.inf
    assert result.high == math.inf
    assert result.low == 0.0


def test_end_to_end_account_cost_forecast() -> None:
    series = _series([100, 110, 120, 130, 132], key="X")

    result = estimate(series)

    # mean 118.4, growth 2/130, population std sqrt(146.24)
    trend = 118.4 * (1 + 2 / 130)
    std = math.sqrt(146.24)
    assert result.mean == 120.22
    assert result.high == 138.36
    assert result.low == 102.08
    assert result.mean == pytest.approx(trend, abs=0.005)
    assert result.high == pytest.approx(trend + 1.5 * std, abs=0.005)
    assert result.low == pytest.approx(trend - 1.5 * std, abs=0.005)


def test_metric_series_requires_full_window() -> None:
    with pytest.raises(ValueError, match="needs 5 observations"):
        MetricSeries(series_key="short", observations=())
    with pytest.raises(ValueError, match="same length"):
        MetricSeries.from_values("bad", month_window(date(2026, 5, 1)), [1.0])
