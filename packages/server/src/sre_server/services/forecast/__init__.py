"""Usage forecasting engine."""

from sre_server.services.forecast.aggregator import (
    discover_entities,
    entity_series,
    forecast_entities,
    forecast_fields,
    forecast_reductions,
    reduce_monthly,
)
from sre_server.services.forecast.estimator import estimate, growth_rate, round_half_up
from sre_server.services.forecast.families import (
    DEFAULT_MONTH_STYLES,
    ForecastReport,
    build_forecast_report,
    collect_forecasts,
    report_to_response,
)
from sre_server.services.forecast.models import (
    ForecastBundle,
    MetricObservation,
    MetricSeries,
    MonthlyRows,
)
from sre_server.services.forecast.normalizer import (
    collect_monthly_rows,
    normalize_series,
)

__all__ = [
    # Models
    "ForecastBundle",
    "MetricObservation",
    "MetricSeries",
    "MonthlyRows",
    # Normalizer
    "collect_monthly_rows",
    "normalize_series",
    # Estimator
    "estimate",
    "growth_rate",
    "round_half_up",
    # Aggregator
    "discover_entities",
    "entity_series",
    "forecast_entities",
    "forecast_fields",
    "forecast_reductions",
    "reduce_monthly",
    # Families
    "DEFAULT_MONTH_STYLES",
    "ForecastReport",
    "build_forecast_report",
    "collect_forecasts",
    "report_to_response",
]
