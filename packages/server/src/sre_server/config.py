import logging
from enum import StrEnum
from functools import lru_cache
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sre_shared._version import __version__
from sre_shared.contracts import MetricFamily
from sre_shared.domain import MonthNameStyle

logger = logging.getLogger(__name__)


class Environments(StrEnum):
    DEV = "dev"
    PROD = "prod"

    def is_production(self) -> bool:
        return self == self.PROD

    def is_development(self) -> bool:
        return self == self.DEV


class Settings(BaseSettings):
    """Server configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SRE_DASHBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_url: str | None = None
    db_pool_size: int = 10
    db_max_overflow: int = 0
    db_echo: bool = False
    env: Environments = Environments.DEV
    host: str = "0.0.0.0"
    port: int = 3000
    debug: bool = False
    log_format: Literal["text", "json"] = "text"
    cors_allow_origins: str = "*"

    # "Today" for the forecast window is taken in this timezone.
    report_timezone: str = "UTC"
    forecast_window_months: int = 5

    # Month spelling used by each collector table.
    month_style_aws_cost: MonthNameStyle = MonthNameStyle.FULL
    month_style_cloudflare_r2: MonthNameStyle = MonthNameStyle.FULL
    month_style_cloudflare_zones: MonthNameStyle = MonthNameStyle.ABBREVIATED
    month_style_s3_buckets: MonthNameStyle = MonthNameStyle.ABBREVIATED

    version: str = __version__

    @field_validator("env", mode="before")
    @classmethod
    def _normalize_env_aliases(cls, value: object) -> object:
        """Allow long-form env aliases."""
        if isinstance(value, str):
            normalized = value.strip().lower()
            aliases = {
                "development": Environments.DEV.value,
                "production": Environments.PROD.value,
            }
            return aliases.get(normalized, normalized)
        return value

    @field_validator("forecast_window_months")
    @classmethod
    def _validate_window(cls, value: int) -> int:
        if value < 2:
            raise ValueError("forecast_window_months must be at least 2")
        return value

    @property
    def is_production(self) -> bool:
        return self.env.is_production()

    @property
    def is_development(self) -> bool:
        return self.env.is_development()

    @property
    def effective_database_url(self) -> str:
        """Get database URL, defaulting to SQLite if not configured."""
        if self.database_url:
            return self.database_url
        return "sqlite+aiosqlite:///sre_dashboard.db"

    @property
    def is_sqlite(self) -> bool:
        """Check if using SQLite database."""
        return self.effective_database_url.startswith("sqlite")

    @property
    def cors_allow_origins_list(self) -> list[str]:
        """Parse comma-delimited CORS origins into a list."""
        origins = [origin.strip() for origin in self.cors_allow_origins.split(",")]
        cleaned = [origin for origin in origins if origin]
        return cleaned or ["*"]

    @property
    def report_tz(self) -> ZoneInfo:
        try:
            return ZoneInfo(self.report_timezone)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(
                "Unknown SRE_DASHBOARD_REPORT_TIMEZONE %r, falling back to UTC",
                self.report_timezone,
            )
            return ZoneInfo("UTC")

    def month_style(self, family: MetricFamily) -> MonthNameStyle:
        return getattr(self, f"month_style_{family.value}")

    @property
    def month_styles(self) -> dict[MetricFamily, MonthNameStyle]:
        return {family: self.month_style(family) for family in MetricFamily}


@lru_cache
def get_settings() -> Settings:
    return Settings()
