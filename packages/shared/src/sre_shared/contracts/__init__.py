"""Public API contracts for the dashboard."""

from sre_shared.contracts.common import (
    ChinaFlag,
    LenientFloat,
    MetricFamily,
    ServerPanel,
    StatusColor,
    Timestamp,
)
from sre_shared.contracts.forecast import (
    AwsCostMonth,
    ChartPoint,
    ForecastChart,
    ForecastChartsResponse,
    ForecastHistory,
    ForecastMarkers,
    ForecastResponse,
    ForecastResult,
    ForecastSection,
    R2Forecast,
    R2Month,
    ZoneForecast,
    ZoneMonth,
)
from sre_shared.contracts.health import (
    DependencyHealth,
    HealthResponse,
    ReadinessMetrics,
)
from sre_shared.contracts.monitoring import (
    FailureRow,
    FailuresResponse,
    PanelFailures,
    ServerStatus,
    ZbrainUrlStatus,
)
from sre_shared.contracts.usage import (
    AwsCost,
    CostRow,
    R2Thresholds,
    R2Usage,
    S3BucketUsage,
    UsageCard,
    UsageResponse,
    UsageSummaryResponse,
    ZoneThreshold,
    ZoneUsage,
)

__all__ = [
    # Common
    "ChinaFlag",
    "LenientFloat",
    "MetricFamily",
    "ServerPanel",
    "StatusColor",
    "Timestamp",
    # Forecast
    "AwsCostMonth",
    "ChartPoint",
    "ForecastChart",
    "ForecastChartsResponse",
    "ForecastHistory",
    "ForecastMarkers",
    "ForecastResponse",
    "ForecastResult",
    "ForecastSection",
    "R2Forecast",
    "R2Month",
    "ZoneForecast",
    "ZoneMonth",
    # Health
    "DependencyHealth",
    "HealthResponse",
    "ReadinessMetrics",
    # Monitoring
    "FailureRow",
    "FailuresResponse",
    "PanelFailures",
    "ServerStatus",
    "ZbrainUrlStatus",
    # Usage
    "AwsCost",
    "CostRow",
    "R2Thresholds",
    "R2Usage",
    "S3BucketUsage",
    "UsageCard",
    "UsageResponse",
    "UsageSummaryResponse",
    "ZoneThreshold",
    "ZoneUsage",
]
