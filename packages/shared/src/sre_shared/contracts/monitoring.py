"""Live status panel contract payloads."""

from pydantic import BaseModel, ConfigDict, Field

from sre_shared.contracts.common import Timestamp


class ServerStatus(BaseModel):
    """
    One row of a live status panel.

    Panels share this shape; each panel only fills the columns its table has.
    """

    model_config = ConfigDict(from_attributes=True, coerce_numbers_to_str=True)

    server_name: str | None = None
    type: str | None = None
    env: str | None = None
    status: str | None = None

    # rp servers
    apache_status: str | None = None
    openssl_status: str | None = None
    website_name: str | None = None
    last_updated: Timestamp = None

    # aem servers
    load: str | None = None
    process_name: str | None = None
    segment_store_size: str | None = None

    # eesof / ruby applications
    app_name: str | None = None
    app_user: str | None = None
    app_version: str | None = None
    app_status: str | None = None
    app_port: str | None = None

    # ping monitor
    response_time_ms: str | None = None
    last_checked: Timestamp = None
    ip_address: str | None = None

    # new relic monitors
    monitor_state: str | None = None
    last_refresh_time: Timestamp = None

    # ssl certificates
    port: str | None = None
    expiry_date: Timestamp = None
    days_remaining: str | None = None

    incident_id: str | None = None


class ZbrainUrlStatus(BaseModel):
    model_config = ConfigDict(from_attributes=True, coerce_numbers_to_str=True)

    url: str | None = None
    status: str | None = None
    status_code: str | None = None
    last_refresh_time: Timestamp = None
    down: bool = False


class FailureRow(BaseModel):
    server_name: str
    type: str
    env: str
    status: str
    details: str
    incident_id: str


class PanelFailures(BaseModel):
    panel: str
    count: int
    rows: list[FailureRow] = Field(default_factory=list)


class FailuresResponse(BaseModel):
    """Failing rows grouped by panel, for the failure banner."""

    total: int = 0
    panels: list[PanelFailures] = Field(default_factory=list)


__all__ = [
    "FailureRow",
    "FailuresResponse",
    "PanelFailures",
    "ServerStatus",
    "ZbrainUrlStatus",
]
