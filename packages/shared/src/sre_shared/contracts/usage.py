"""Cloud usage and cost contract payloads."""

from pydantic import BaseModel, ConfigDict, Field

from sre_shared.contracts.common import ChinaFlag, LenientFloat, StatusColor, Timestamp


class S3BucketUsage(BaseModel):
    """One bucket row from the S3 usage collector."""

    model_config = ConfigDict(from_attributes=True, coerce_numbers_to_str=True)

    account_name: str | None = None
    bucket_name: str | None = None
    size_mb: LenientFloat = None
    retention: str | None = None


class R2Usage(BaseModel):
    """Monthly Cloudflare R2 usage snapshot."""

    model_config = ConfigDict(from_attributes=True, coerce_numbers_to_str=True)

    object_count: LenientFloat = None
    payload_size_tb: LenientFloat = None
    class_a_requests_mm: LenientFloat = None
    class_b_requests_mm: LenientFloat = None
    last_refresh_time: Timestamp = None


class R2Thresholds(BaseModel):
    model_config = ConfigDict(from_attributes=True, coerce_numbers_to_str=True)

    payload_size_tb: LenientFloat = None
    class_a_requests: LenientFloat = None
    class_b_requests: LenientFloat = None


class ZoneUsage(BaseModel):
    """Monthly Cloudflare zone traffic row."""

    model_config = ConfigDict(from_attributes=True, coerce_numbers_to_str=True)

    account_name: str | None = None
    zone_name: str | None = None
    requests_m: LenientFloat = None
    bandwidth_tb: LenientFloat = None
    is_china: ChinaFlag = False
    refresh_time_ist: Timestamp = None


class ZoneThreshold(BaseModel):
    model_config = ConfigDict(from_attributes=True, coerce_numbers_to_str=True)

    requests_m: LenientFloat = None
    bandwidth_tb: LenientFloat = None
    is_china: ChinaFlag = False


class AwsCost(BaseModel):
    """Month-to-date AWS cost for one account."""

    model_config = ConfigDict(from_attributes=True, coerce_numbers_to_str=True)

    account_name: str | None = None
    account_id: str | None = None
    baseline_cost: LenientFloat = None
    current_cost: LenientFloat = None


class UsageResponse(BaseModel):
    """Current-month usage payload."""

    s3_buckets: list[S3BucketUsage] = Field(default_factory=list)
    cloudflare_r2: list[R2Usage] = Field(default_factory=list)
    cloudflare_r2_thresholds: R2Thresholds | None = None
    cloudflare_zones: list[ZoneUsage] = Field(default_factory=list)
    cloudflare_zone_thresholds: list[ZoneThreshold] = Field(default_factory=list)
    aws_costs: list[AwsCost] = Field(default_factory=list)
    current_month: str
    current_year: int


class UsageCard(BaseModel):
    """Threshold-coloured usage card."""

    key: str
    label: str
    value: float | None = None
    display: str
    threshold: float
    percent: float | None = None
    percent_display: str
    color: StatusColor | None = None


class CostRow(BaseModel):
    """AWS cost table row, coloured by share of baseline."""

    account_name: str
    current_cost: float
    baseline_cost: float
    percent: float
    cost_display: str
    percent_display: str
    color: StatusColor


class UsageSummaryResponse(BaseModel):
    r2_cards: list[UsageCard] = Field(default_factory=list)
    zone_cards: list[UsageCard] = Field(default_factory=list)
    cost_rows: list[CostRow] = Field(default_factory=list)
    current_month: str
    current_year: int


__all__ = [
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
