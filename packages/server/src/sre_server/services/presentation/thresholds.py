"""Threshold-coloured usage cards and the AWS cost table."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from sre_shared.contracts import (
    AwsCost,
    CostRow,
    R2Thresholds,
    R2Usage,
    StatusColor,
    UsageCard,
    ZoneThreshold,
    ZoneUsage,
)
from sre_shared.domain import coerce_number, number_or_zero

from sre_server.services.presentation.formatting import (
    NO_DATA,
    format_percent,
    format_quantity,
)

WARNING_PERCENT = 75.0
CRITICAL_PERCENT = 80.0


def _positive_or(value: object, default: float) -> float:
    # Blank, zero or unparseable limits fall back to the default.
    number = coerce_number(value)
    return number if number else default


@dataclass(frozen=True)
class UsageThresholds:
    """Cloudflare R2 limits for the current billing month."""

    payload_tb: float = 80.0
    class_a_mm: float = 550.0
    class_b_mm: float = 600.0

    @classmethod
    def from_row(cls, row: R2Thresholds | None) -> UsageThresholds:
        if row is None:
            return cls()
        defaults = cls()
        return cls(
            payload_tb=_positive_or(row.payload_size_tb, defaults.payload_tb),
            class_a_mm=_positive_or(row.class_a_requests, defaults.class_a_mm),
            class_b_mm=_positive_or(row.class_b_requests, defaults.class_b_mm),
        )


@dataclass(frozen=True)
class ZoneLimit:
    bandwidth_tb: float
    requests_m: float


@dataclass(frozen=True)
class ZoneThresholds:
    """Zone limits, split between China and .com traffic."""

    china: ZoneLimit = field(default_factory=lambda: ZoneLimit(5.0, 1200.0))
    com: ZoneLimit = field(default_factory=lambda: ZoneLimit(120.0, 1200.0))
    all_requests_m: float = 1200.0

    @classmethod
    def from_rows(cls, rows: Iterable[ZoneThreshold]) -> ZoneThresholds:
        """
        Build limits from the threshold table.

        The China row and the .com row each override their defaults; the
        combined request limit follows the China row.
        """
        rows = list(rows)
        if not rows:
            return cls()
        defaults = cls()
        china, com = defaults.china, defaults.com
        for row in rows:
            if row.is_china:
                china = ZoneLimit(
                    bandwidth_tb=_positive_or(row.bandwidth_tb, defaults.china.bandwidth_tb),
                    requests_m=_positive_or(row.requests_m, defaults.china.requests_m),
                )
            else:
                com = ZoneLimit(
                    bandwidth_tb=_positive_or(row.bandwidth_tb, defaults.com.bandwidth_tb),
                    requests_m=_positive_or(row.requests_m, defaults.com.requests_m),
                )
        return cls(china=china, com=com, all_requests_m=china.requests_m)


def classify_percentage(
    percent: float, *, critical_inclusive: bool = False
) -> StatusColor:
    """
    Traffic-light colour for a share of a limit.

    Cards turn red strictly above 80%; the cost table (``critical_inclusive``)
    already at 80%.
    """
    if percent > CRITICAL_PERCENT or (critical_inclusive and percent >= CRITICAL_PERCENT):
        return StatusColor.RED
    if percent >= WARNING_PERCENT:
        return StatusColor.YELLOW
    return StatusColor.GREEN


def _percent_of(value: float, limit: float) -> float:
    return value / limit * 100 if limit else 0.0


def build_card(
    key: str, label: str, value: float | None, *, threshold: float, unit: str
) -> UsageCard:
    if value is None:
        return UsageCard(
            key=key,
            label=label,
            value=None,
            display=NO_DATA,
            threshold=threshold,
            percent=None,
            percent_display=format_percent(None),
            color=None,
        )
    percent = _percent_of(value, threshold)
    return UsageCard(
        key=key,
        label=label,
        value=value,
        display=format_quantity(value, unit),
        threshold=threshold,
        percent=percent,
        percent_display=format_percent(percent),
        color=classify_percentage(percent),
    )


def build_r2_cards(
    rows: Sequence[R2Usage], thresholds: UsageThresholds
) -> list[UsageCard]:
    """Payload and request cards from the month's R2 snapshot."""
    snapshot = rows[0] if rows else None

    def value(attr: str) -> float | None:
        if snapshot is None:
            return None
        return number_or_zero(getattr(snapshot, attr))

    return [
        build_card(
            "payload_tb",
            "Payload Size",
            value("payload_size_tb"),
            threshold=thresholds.payload_tb,
            unit="TB",
        ),
        build_card(
            "class_a_requests",
            "Class A Requests",
            value("class_a_requests_mm"),
            threshold=thresholds.class_a_mm,
            unit="MM",
        ),
        build_card(
            "class_b_requests",
            "Class B Requests",
            value("class_b_requests_mm"),
            threshold=thresholds.class_b_mm,
            unit="MM",
        ),
    ]


def build_zone_cards(
    rows: Sequence[ZoneUsage], thresholds: ZoneThresholds
) -> list[UsageCard]:
    """All-requests, .com bandwidth and China bandwidth cards, in display order."""
    if rows:
        china = sum(number_or_zero(row.bandwidth_tb) for row in rows if row.is_china)
        com = sum(number_or_zero(row.bandwidth_tb) for row in rows if not row.is_china)
        requests: float | None = sum(number_or_zero(row.requests_m) for row in rows)
    else:
        china = com = requests = None

    return [
        build_card(
            "all_requests",
            "All Requests",
            requests,
            threshold=thresholds.all_requests_m,
            unit="M",
        ),
        build_card(
            "com_bandwidth",
            ".com Bandwidth",
            com,
            threshold=thresholds.com.bandwidth_tb,
            unit="TB",
        ),
        build_card(
            "china_bandwidth",
            "China Bandwidth",
            china,
            threshold=thresholds.china.bandwidth_tb,
            unit="TB",
        ),
    ]


def build_usage_cards(
    *,
    r2_rows: Sequence[R2Usage],
    r2_thresholds: UsageThresholds,
    zone_rows: Sequence[ZoneUsage],
    zone_thresholds: ZoneThresholds,
) -> tuple[list[UsageCard], list[UsageCard]]:
    return (
        build_r2_cards(r2_rows, r2_thresholds),
        build_zone_cards(zone_rows, zone_thresholds),
    )


def build_cost_rows(costs: Iterable[AwsCost]) -> list[CostRow]:
    """AWS cost table rows; the percentage is current cost over baseline."""
    rows: list[CostRow] = []
    for cost in costs:
        current = number_or_zero(cost.current_cost)
        baseline = number_or_zero(cost.baseline_cost)
        percent = current / baseline * 100 if baseline > 0 else 0.0
        rows.append(
            CostRow(
                account_name=cost.account_name or "-",
                current_cost=current,
                baseline_cost=baseline,
                percent=percent,
                cost_display=format_quantity(current, "USD"),
                percent_display=format_percent(percent),
                color=classify_percentage(percent, critical_inclusive=True),
            )
        )
    return rows


__all__ = [
    "CRITICAL_PERCENT",
    "WARNING_PERCENT",
    "UsageThresholds",
    "ZoneLimit",
    "ZoneThresholds",
    "build_card",
    "build_cost_rows",
    "build_r2_cards",
    "build_usage_cards",
    "build_zone_cards",
    "classify_percentage",
]
