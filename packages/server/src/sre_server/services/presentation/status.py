"""Health classification and failure summaries for the live status panels."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from sre_shared.contracts import (
    FailureRow,
    FailuresResponse,
    PanelFailures,
    ServerPanel,
    ServerStatus,
    ZbrainUrlStatus,
)
from sre_shared.domain import coerce_number

from sre_server.db.repositories.monitoring_repository import ZBRAIN_DOWN_STATUSES

STATUS_FIELDS = ("status", "app_status", "apache_status", "openssl_status")
UNHEALTHY_STATUSES = frozenset(
    {"DOWN", "FAILED", "CRITICAL", "ERROR", "OFFLINE", "ALERTING"}
)
SSL_WARNING_DAYS = 30
DETAILS_SEPARATOR = " | "


def is_unhealthy_status(value: str | None) -> bool:
    if not value:
        return False
    status = value.strip().upper()
    return status in UNHEALTHY_STATUSES or "FAIL" in status


def is_server_healthy(row: ServerStatus) -> bool:
    """
    A row is healthy unless one of its status columns reports a failure or
    its certificate expires within ``SSL_WARNING_DAYS``.
    """
    for field_name in STATUS_FIELDS:
        if is_unhealthy_status(getattr(row, field_name)):
            return False
    days = coerce_number(row.days_remaining)
    if days is not None and days < SSL_WARNING_DAYS:
        return False
    return True


def _details(pairs: Sequence[tuple[str, str | None, str]]) -> str:
    parts = [f"{prefix}{value}{suffix}" for prefix, value, suffix in pairs if value]
    return DETAILS_SEPARATOR.join(parts) or "-"


def describe_server(row: ServerStatus, panel: ServerPanel | str) -> str:
    """The details column of the failure table."""
    panel = ServerPanel(panel)
    if panel is ServerPanel.RP_SERVERS:
        return _details(
            [
                ("Website: ", row.website_name, ""),
                ("Apache: ", row.apache_status, ""),
                ("OpenSSL: ", row.openssl_status, ""),
            ]
        )
    if panel is ServerPanel.AEM_SERVERS:
        return _details([("Process: ", row.process_name, ""), ("Load: ", row.load, "")])
    if panel in (ServerPanel.EESOF_APPLICATIONS, ServerPanel.RUBY_APPLICATIONS):
        return _details([("App: ", row.app_name, ""), ("Port: ", row.app_port, "")])
    if panel is ServerPanel.PING_MONITOR:
        return _details(
            [("IP: ", row.ip_address, ""), ("Response: ", row.response_time_ms, "ms")]
        )
    if panel is ServerPanel.SSL_CERTIFICATES:
        return _details(
            [
                ("Port: ", row.port, ""),
                ("Days: ", row.days_remaining, ""),
                ("Expires: ", str(row.expiry_date) if row.expiry_date else None, ""),
            ]
        )
    return "-"


def display_incident(incident_id: str | None) -> str:
    if not incident_id or incident_id.strip().upper() == "NULL":
        return "-"
    return incident_id


def to_failure_row(row: ServerStatus, panel: ServerPanel | str) -> FailureRow:
    return FailureRow(
        server_name=row.server_name or "Unknown",
        type=row.type or "-",
        env=row.env or "-",
        status=row.status or row.app_status or "-",
        details=describe_server(row, panel),
        incident_id=display_incident(row.incident_id),
    )


def summarize_failures(
    panels: Mapping[str, Sequence[ServerStatus]],
) -> FailuresResponse:
    """Failing rows grouped per panel; panels with no failures are left out."""
    groups: list[PanelFailures] = []
    for panel, rows in panels.items():
        failing = [
            to_failure_row(row, panel) for row in rows if not is_server_healthy(row)
        ]
        if failing:
            groups.append(PanelFailures(panel=panel, count=len(failing), rows=failing))
    return FailuresResponse(total=sum(group.count for group in groups), panels=groups)


def is_url_down(row: ZbrainUrlStatus) -> bool:
    """Zbrain URLs are down when their status matches the down-first ordering."""
    if not row.status:
        return False
    status = row.status.strip().upper()
    return status in ZBRAIN_DOWN_STATUSES or "FAIL" in status


__all__ = [
    "SSL_WARNING_DAYS",
    "STATUS_FIELDS",
    "UNHEALTHY_STATUSES",
    "describe_server",
    "display_incident",
    "is_server_healthy",
    "is_unhealthy_status",
    "is_url_down",
    "summarize_failures",
    "to_failure_row",
]
