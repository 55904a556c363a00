"""Repository for the live status panels."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Integer, case, cast, func, literal, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select
from sre_shared.contracts import ServerPanel, ServerStatus, ZbrainUrlStatus

from sre_server.db.repositories.utils import fetch_mappings
from sre_server.db.tables import (
    AemServerDetail,
    EesofAppDetail,
    NewRelicDetail,
    PingMonitorStatus,
    RpServerDetail,
    RubyApp,
    Server,
    SslCertificate,
    ZbrainUrlStatusRow,
)

ZBRAIN_DOWN_STATUSES = ("DOWN", "FAILED", "ERROR", "OFFLINE")


def _server_columns() -> tuple[Any, ...]:
    return (
        Server.server_name.label("server_name"),
        Server.type.label("type"),
        Server.env.label("env"),
    )


def _blank_server_columns(name_column: Any) -> tuple[Any, ...]:
    """Panels without a ``servers`` row report their own name and blank type/env."""
    return (
        name_column.label("server_name"),
        literal("").label("type"),
        literal("").label("env"),
    )


def panel_query(panel: ServerPanel) -> Select[Any]:
    """Build the select feeding one status panel."""
    if panel is ServerPanel.RP_SERVERS:
        return (
            select(
                *_server_columns(),
                RpServerDetail.status.label("status"),
                RpServerDetail.apache_status.label("apache_status"),
                RpServerDetail.openssl_status.label("openssl_status"),
                RpServerDetail.website_name.label("website_name"),
                RpServerDetail.incident_id.label("incident_id"),
                RpServerDetail.last_updated.label("last_updated"),
            )
            .join(Server, RpServerDetail.server_id == Server.id)
            .order_by(Server.server_name)
        )
    if panel is ServerPanel.AEM_SERVERS:
        return (
            select(
                *_server_columns(),
                AemServerDetail.status.label("status"),
                AemServerDetail.load.label("load"),
                AemServerDetail.process_name.label("process_name"),
                AemServerDetail.segment_store_size.label("segment_store_size"),
            )
            .join(Server, AemServerDetail.server_id == Server.id)
            .order_by(Server.server_name)
        )
    if panel is ServerPanel.EESOF_APPLICATIONS:
        return (
            select(
                *_server_columns(),
                EesofAppDetail.app_name.label("app_name"),
                EesofAppDetail.app_user.label("app_user"),
                EesofAppDetail.app_version.label("app_version"),
                EesofAppDetail.app_status.label("app_status"),
                EesofAppDetail.incident_id.label("incident_id"),
            )
            .join(Server, EesofAppDetail.server_id == Server.id)
            .order_by(Server.server_name, EesofAppDetail.app_name)
        )
    if panel is ServerPanel.RUBY_APPLICATIONS:
        return (
            select(
                *_server_columns(),
                RubyApp.app_name.label("app_name"),
                RubyApp.app_user.label("app_user"),
                RubyApp.app_port.label("app_port"),
                RubyApp.app_status.label("app_status"),
            )
            .join(Server, RubyApp.server_id == Server.id)
            .order_by(Server.server_name, RubyApp.app_name)
        )
    if panel is ServerPanel.PING_MONITOR:
        return select(
            *_blank_server_columns(PingMonitorStatus.hostname),
            PingMonitorStatus.ping_status.label("status"),
            PingMonitorStatus.response_time_ms.label("response_time_ms"),
            PingMonitorStatus.last_checked.label("last_checked"),
            PingMonitorStatus.ip_address.label("ip_address"),
        ).order_by(PingMonitorStatus.hostname)
    if panel is ServerPanel.NEW_RELIC_MONITORS:
        return select(
            *_blank_server_columns(NewRelicDetail.monitor_name),
            NewRelicDetail.monitor_state.label("monitor_state"),
            NewRelicDetail.monitor_status.label("status"),
            NewRelicDetail.last_refresh_time.label("last_refresh_time"),
            NewRelicDetail.incident_id.label("incident_id"),
        ).order_by(NewRelicDetail.monitor_name)
    if panel is ServerPanel.SSL_CERTIFICATES:
        return select(
            *_blank_server_columns(SslCertificate.host),
            SslCertificate.port.label("port"),
            SslCertificate.status.label("status"),
            SslCertificate.expiry_date.label("expiry_date"),
            SslCertificate.days_remaining.label("days_remaining"),
            SslCertificate.incident_id.label("incident_id"),
        ).order_by(cast(SslCertificate.days_remaining, Integer))
    raise ValueError(f"Unknown panel: {panel!r}")


class MonitoringRepository:
    """
    Read-only queries behind the live status panels.

    Every method raises ``DataFetchError`` when the database call fails.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_panel(self, panel: ServerPanel) -> list[ServerStatus]:
        rows = await fetch_mappings(self._session, panel_query(panel), source=panel.value)
        return [ServerStatus.model_validate(dict(row)) for row in rows]

    async def list_all_panels(self) -> dict[str, list[ServerStatus]]:
        """Rows of every panel keyed by panel name, in rotation order."""
        panels: dict[str, list[ServerStatus]] = {}
        for panel in ServerPanel:
            panels[panel.value] = await self.list_panel(panel)
        return panels

    async def list_zbrain_status(self) -> list[ZbrainUrlStatus]:
        """Zbrain URL checks, failing URLs first."""
        normalized = func.upper(func.coalesce(ZbrainUrlStatusRow.status, ""))
        down_first = case(
            (normalized.in_(ZBRAIN_DOWN_STATUSES), 1),
            (normalized.like("%FAIL%"), 1),
            else_=2,
        )
        query = select(
            ZbrainUrlStatusRow.url.label("url"),
            ZbrainUrlStatusRow.status.label("status"),
            ZbrainUrlStatusRow.status_code.label("status_code"),
            ZbrainUrlStatusRow.last_refresh_time.label("last_refresh_time"),
        ).order_by(down_first, ZbrainUrlStatusRow.id)
        rows = await fetch_mappings(self._session, query, source="Zbrain status")
        return [ZbrainUrlStatus.model_validate(dict(row)) for row in rows]
