"""
SQLAlchemy mapping of the collector tables read by the dashboard.

The schema is owned by the collectors that write these tables; the mapping
only mirrors the columns the dashboard reads. Most figures are stored as text
by the collectors, so numeric-looking columns are mapped as strings and parsed
leniently at the contract layer.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


# ---------------------------------------------------------------------------
# Live status panels
# ---------------------------------------------------------------------------


class Server(Base):
    __tablename__ = "servers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    server_name: Mapped[str] = mapped_column("SERVER_NAME", String(255), nullable=False)
    type: Mapped[str | None] = mapped_column("TYPE", String(64), nullable=True)
    env: Mapped[str | None] = mapped_column("ENV", String(64), nullable=True)

    def __repr__(self) -> str:
        return f"<Server(id={self.id!r}, server_name={self.server_name!r})>"


class RpServerDetail(Base):
    """Reverse-proxy (Apache) server checks."""

    __tablename__ = "rp_server_details"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    server_id: Mapped[int] = mapped_column(ForeignKey("servers.id"), nullable=False)
    status: Mapped[str | None] = mapped_column("STATUS", String(32))
    apache_status: Mapped[str | None] = mapped_column("APACHE_STATUS", String(32))
    openssl_status: Mapped[str | None] = mapped_column("OPENSSL_STATUS", String(32))
    website_name: Mapped[str | None] = mapped_column("WEBSITE_NAME", String(255))
    incident_id: Mapped[str | None] = mapped_column("INCIDENT_ID", String(64))
    last_updated: Mapped[datetime | None] = mapped_column("LAST_UPDATED", DateTime)


class AemServerDetail(Base):
    __tablename__ = "AEM_server_details"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    server_id: Mapped[int] = mapped_column(ForeignKey("servers.id"), nullable=False)
    status: Mapped[str | None] = mapped_column("STATUS", String(32))
    load: Mapped[str | None] = mapped_column("LOAD", String(32))
    process_name: Mapped[str | None] = mapped_column("PROCESS_NAME", String(255))
    segment_store_size: Mapped[str | None] = mapped_column(
        "SEGMENT_STORE_SIZE", String(64)
    )


class EesofAppDetail(Base):
    __tablename__ = "eesof_app_details"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    server_id: Mapped[int] = mapped_column(ForeignKey("servers.id"), nullable=False)
    app_name: Mapped[str | None] = mapped_column("APP_NAME", String(255))
    app_user: Mapped[str | None] = mapped_column("APP_USER", String(64))
    app_version: Mapped[str | None] = mapped_column("APP_VERSION", String(64))
    app_status: Mapped[str | None] = mapped_column("APP_STATUS", String(32))
    incident_id: Mapped[str | None] = mapped_column("INCIDENT_ID", String(64))


class RubyApp(Base):
    __tablename__ = "ruby_apps"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    server_id: Mapped[int] = mapped_column(ForeignKey("servers.id"), nullable=False)
    app_name: Mapped[str | None] = mapped_column("APP_NAME", String(255))
    app_user: Mapped[str | None] = mapped_column("APP_USER", String(64))
    app_port: Mapped[str | None] = mapped_column("APP_PORT", String(16))
    app_status: Mapped[str | None] = mapped_column("APP_STATUS", String(32))


class PingMonitorStatus(Base):
    __tablename__ = "ping_monitor_status"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    hostname: Mapped[str] = mapped_column(String(255), nullable=False)
    ping_status: Mapped[str | None] = mapped_column(String(32))
    response_time_ms: Mapped[str | None] = mapped_column(String(32))
    last_checked: Mapped[datetime | None] = mapped_column(DateTime)
    ip_address: Mapped[str | None] = mapped_column(String(64))


class NewRelicDetail(Base):
    __tablename__ = "new_relic_details"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    monitor_name: Mapped[str] = mapped_column("MONITOR_NAME", String(255), nullable=False)
    monitor_state: Mapped[str | None] = mapped_column("MONITOR_STATE", String(32))
    monitor_status: Mapped[str | None] = mapped_column("MONITOR_STATUS", String(32))
    last_refresh_time: Mapped[datetime | None] = mapped_column(
        "LAST_REFRESH_TIME", DateTime
    )
    incident_id: Mapped[str | None] = mapped_column("INCIDENT_ID", String(64))


class SslCertificate(Base):
    __tablename__ = "ssl_certificates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    host: Mapped[str] = mapped_column("HOST", String(255), nullable=False)
    port: Mapped[str | None] = mapped_column("PORT", String(16))
    status: Mapped[str | None] = mapped_column("STATUS", String(32))
    expiry_date: Mapped[datetime | None] = mapped_column("EXPIRY_DATE", DateTime)
    days_remaining: Mapped[str | None] = mapped_column("DAYS_REMAINING", String(16))
    incident_id: Mapped[str | None] = mapped_column("INCIDENT_ID", String(64))


class ZbrainUrlStatusRow(Base):
    __tablename__ = "Zbrain_url_status"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    url: Mapped[str | None] = mapped_column(String(500))
    status: Mapped[str | None] = mapped_column(String(32))
    status_code: Mapped[str | None] = mapped_column(String(16))
    last_refresh_time: Mapped[datetime | None] = mapped_column(
        "LAST_REFRESH_TIME", DateTime
    )


# ---------------------------------------------------------------------------
# Monthly usage and cost
# ---------------------------------------------------------------------------


class S3BucketUsageRow(Base):
    """S3 bucket sizes; ``Month`` holds abbreviated names ("Mar")."""

    __tablename__ = "s3_bucket_usage"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    account_name: Mapped[str | None] = mapped_column("Account_Name", String(255))
    bucket_name: Mapped[str | None] = mapped_column("Bucket_Name", String(255))
    size_mb: Mapped[str | None] = mapped_column("Size_MB", String(32))
    retention: Mapped[str | None] = mapped_column("Retention", String(64))
    year: Mapped[int] = mapped_column("Year", Integer, nullable=False)
    month: Mapped[str] = mapped_column("Month", String(16), nullable=False)


class R2ThresholdRow(Base):
    __tablename__ = "R2thresholds"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    payload_size_tb: Mapped[str | None] = mapped_column("PAYLOAD_SIZE_TB", String(32))
    class_a_requests: Mapped[str | None] = mapped_column(
        "Class_A_Requests_PutObject", String(32)
    )
    class_b_requests: Mapped[str | None] = mapped_column(
        "Class_B_Requests_GetObject", String(32)
    )


class R2UsageRow(Base):
    """Cloudflare R2 monthly usage; ``YEAR`` is text and ``MONTH`` a full name."""

    __tablename__ = "cloudflare_R2_usageth"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    object_count: Mapped[str | None] = mapped_column("OBJECT_COUNT", String(32))
    payload_size_tb: Mapped[str | None] = mapped_column("PAYLOAD_SIZE_TB", String(32))
    class_a_requests_mm: Mapped[str | None] = mapped_column(
        "Class_A_Requests_MM_PutObject", String(32)
    )
    class_b_requests_mm: Mapped[str | None] = mapped_column(
        "Class_B_Requests_MM_GetObject", String(32)
    )
    last_refresh_time: Mapped[datetime | None] = mapped_column(
        "LAST_REFRESH_TIME", DateTime
    )
    year: Mapped[str] = mapped_column("YEAR", String(4), nullable=False)
    month: Mapped[str] = mapped_column("MONTH", String(16), nullable=False)


class ZoneUsageRow(Base):
    """Cloudflare zone traffic; ``Month`` holds abbreviated names."""

    __tablename__ = "cloudflare_zone_usage"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    account_name: Mapped[str | None] = mapped_column("Account_Name", String(255))
    zone_name: Mapped[str | None] = mapped_column("Zone_Name", String(255))
    requests_m: Mapped[str | None] = mapped_column("Requests_M", String(32))
    bandwidth_tb: Mapped[str | None] = mapped_column("Bandwidth_TB", String(32))
    # Collectors write both 1/0 and '1'/'0'.
    is_china: Mapped[str | None] = mapped_column("Is_China", String(8))
    refresh_time_ist: Mapped[datetime | None] = mapped_column(
        "refresh_time_ist", DateTime
    )
    year: Mapped[int] = mapped_column("Year", Integer, nullable=False)
    month: Mapped[str] = mapped_column("Month", String(16), nullable=False)


class ZoneThresholdRow(Base):
    __tablename__ = "ZoneThreshold"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    requests_m: Mapped[str | None] = mapped_column("Requests_M", String(32))
    bandwidth_tb: Mapped[str | None] = mapped_column("Bandwidth_TB", String(32))
    is_china: Mapped[str | None] = mapped_column("Is_China", String(8))


class AwsCostReportRow(Base):
    """Month-to-date AWS cost per account; ``month`` holds full names."""

    __tablename__ = "aws_cost_report"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    account_name: Mapped[str | None] = mapped_column(String(255))
    account_id: Mapped[str | None] = mapped_column(String(32))
    baseline_cost: Mapped[str | None] = mapped_column(String(32))
    current_cost: Mapped[str | None] = mapped_column(String(32))
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    month: Mapped[str] = mapped_column(String(16), nullable=False)


__all__ = [
    "Base",
    "AemServerDetail",
    "AwsCostReportRow",
    "EesofAppDetail",
    "NewRelicDetail",
    "PingMonitorStatus",
    "R2ThresholdRow",
    "R2UsageRow",
    "RpServerDetail",
    "RubyApp",
    "S3BucketUsageRow",
    "Server",
    "SslCertificate",
    "ZbrainUrlStatusRow",
    "ZoneThresholdRow",
    "ZoneUsageRow",
]
