"""Renderable structures for the dashboard frontend."""

from sre_server.services.presentation.charts import (
    build_forecast_chart,
    build_forecast_charts,
)
from sre_server.services.presentation.formatting import (
    format_fixed,
    format_percent,
    format_quantity,
)
from sre_server.services.presentation.status import (
    describe_server,
    is_server_healthy,
    is_url_down,
    summarize_failures,
)
from sre_server.services.presentation.thresholds import (
    UsageThresholds,
    ZoneThresholds,
    build_cost_rows,
    build_usage_cards,
    classify_percentage,
)

__all__ = [
    # Charts
    "build_forecast_chart",
    "build_forecast_charts",
    # Formatting
    "format_fixed",
    "format_percent",
    "format_quantity",
    # Status
    "describe_server",
    "is_server_healthy",
    "is_url_down",
    "summarize_failures",
    # Thresholds
    "UsageThresholds",
    "ZoneThresholds",
    "build_cost_rows",
    "build_usage_cards",
    "classify_percentage",
]
