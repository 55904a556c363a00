"""Month-end forecast contract payloads."""

from pydantic import BaseModel, ConfigDict, Field

from sre_shared.contracts.common import MetricFamily
from sre_shared.contracts.usage import AwsCost, R2Usage, ZoneUsage


class ForecastResult(BaseModel):
    """Month-end projection band for one series."""

    model_config = ConfigDict(frozen=True)

    high: float = 0.0
    mean: float = 0.0
    low: float = Field(default=0.0, ge=0.0)


class AwsCostMonth(BaseModel):
    month: str
    year: int
    data: list[AwsCost] = Field(default_factory=list)


class R2Month(BaseModel):
    month: str
    year: int
    data: R2Usage | None = None


class ZoneMonth(BaseModel):
    month: str
    year: int
    data: list[ZoneUsage] = Field(default_factory=list)


class ForecastHistory(BaseModel):
    """Rows of every month in the window, echoed for trend lines."""

    aws_cost: list[AwsCostMonth] = Field(default_factory=list)
    cloudflare_r2: list[R2Month] = Field(default_factory=list)
    cloudflare_zones: list[ZoneMonth] = Field(default_factory=list)


class R2Forecast(BaseModel):
    payload_tb: ForecastResult = Field(default_factory=ForecastResult)
    class_a_requests: ForecastResult = Field(default_factory=ForecastResult)
    class_b_requests: ForecastResult = Field(default_factory=ForecastResult)


class ZoneForecast(BaseModel):
    china_bandwidth: ForecastResult = Field(default_factory=ForecastResult)
    com_bandwidth: ForecastResult = Field(default_factory=ForecastResult)
    all_requests: ForecastResult = Field(default_factory=ForecastResult)


class ForecastSection(BaseModel):
    aws_cost: dict[str, ForecastResult] = Field(default_factory=dict)
    cloudflare_r2: R2Forecast = Field(default_factory=R2Forecast)
    cloudflare_zones: ZoneForecast = Field(default_factory=ZoneForecast)


class ForecastResponse(BaseModel):
    """Forecast panel payload."""

    historical: ForecastHistory = Field(default_factory=ForecastHistory)
    forecast: ForecastSection = Field(default_factory=ForecastSection)
    forecast_month: str
    forecast_date: int
    current_month: str
    current_year: int


class ChartPoint(BaseModel):
    label: str
    value: float | None = None
    display: str
    partial: bool = False


class ForecastMarkers(BaseModel):
    """High/mean/low markers anchored at the synthetic month-end point."""

    label: str = "Month End"
    high: ChartPoint
    mean: ChartPoint
    low: ChartPoint


class ForecastChart(BaseModel):
    """Renderable trend chart for one series."""

    family: MetricFamily
    series_key: str
    label: str
    unit: str
    historical: list[ChartPoint] = Field(default_factory=list)
    current: ChartPoint
    forecast: ForecastMarkers


class ForecastChartsResponse(BaseModel):
    charts: list[ForecastChart] = Field(default_factory=list)
    forecast_month: str
    current_year: int


__all__ = [
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
]
