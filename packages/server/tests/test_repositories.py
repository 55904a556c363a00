from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest
from sre_shared.contracts import ServerPanel

from sre_server.db.errors import DataFetchError
from sre_server.db.repositories import MonitoringRepository, UsageRepository
from sre_server.db.session import Database
from sre_server.db.tables import (
    AemServerDetail,
    AwsCostReportRow,
    NewRelicDetail,
    PingMonitorStatus,
    R2ThresholdRow,
    R2UsageRow,
    RpServerDetail,
    RubyApp,
    S3BucketUsageRow,
    Server,
    SslCertificate,
    ZbrainUrlStatusRow,
    ZoneThresholdRow,
    ZoneUsageRow,
)


@pytest.mark.asyncio
async def test_rp_and_aem_panels_join_server_metadata(sqlite_db, seed) -> None:
    await seed(
        Server(id=1, server_name="rp-02", type="RP", env="prod"),
        Server(id=2, server_name="rp-01", type="RP", env="stage"),
        Server(id=3, server_name="aem-01", type="AEM", env="prod"),
        RpServerDetail(
            server_id=1,
            status="UP",
            apache_status="running",
            openssl_status="ok",
            website_name="www.example.com",
            incident_id="NULL",
        ),
        RpServerDetail(server_id=2, status="DOWN", apache_status="stopped"),
        AemServerDetail(server_id=3, status="UP", load="0.4", process_name="java"),
    )

    async with sqlite_db.session() as session:
        repo = MonitoringRepository(session)
        rp_rows = await repo.list_panel(ServerPanel.RP_SERVERS)
        aem_rows = await repo.list_panel(ServerPanel.AEM_SERVERS)

    assert [row.server_name for row in rp_rows] == ["rp-01", "rp-02"]
    assert rp_rows[0].status == "DOWN"
    assert rp_rows[0].env == "stage"
    assert rp_rows[1].website_name == "www.example.com"
    assert rp_rows[1].incident_id == "NULL"
    assert aem_rows[0].process_name == "java"
    assert aem_rows[0].load == "0.4"


@pytest.mark.asyncio
async def test_standalone_panels_report_blank_type_and_env(sqlite_db, seed) -> None:
    await seed(
        PingMonitorStatus(
            hostname="gw-1", ping_status="FAILED", response_time_ms="0", ip_address="10.0.0.1"
        ),
        NewRelicDetail(monitor_name="checkout", monitor_state="ENABLED", monitor_status="ALERTING"),
        SslCertificate(host="b.example.com", port="443", status="VALID", days_remaining="120"),
        SslCertificate(host="a.example.com", port="8443", status="VALID", days_remaining="9"),
    )

    async with sqlite_db.session() as session:
        repo = MonitoringRepository(session)
        ping = await repo.list_panel(ServerPanel.PING_MONITOR)
        relic = await repo.list_panel(ServerPanel.NEW_RELIC_MONITORS)
        ssl = await repo.list_panel(ServerPanel.SSL_CERTIFICATES)

    assert ping[0].server_name == "gw-1"
    assert ping[0].status == "FAILED"
    assert ping[0].type == ""
    assert ping[0].env == ""
    assert relic[0].status == "ALERTING"
    assert relic[0].monitor_state == "ENABLED"
    # ordered by days remaining, soonest expiry first
    assert [row.server_name for row in ssl] == ["a.example.com", "b.example.com"]
    assert ssl[0].days_remaining == "9"


@pytest.mark.asyncio
async def test_list_all_panels_keeps_rotation_order(sqlite_db, seed) -> None:
    await seed(
        Server(id=1, server_name="app-01", type="APP", env="prod"),
        RubyApp(server_id=1, app_name="billing", app_port="3001", app_status="RUNNING"),
    )

    async with sqlite_db.session() as session:
        panels = await MonitoringRepository(session).list_all_panels()

    assert list(panels) == [panel.value for panel in ServerPanel]
    assert panels["ruby applications"][0].app_port == "3001"
    assert panels["rp servers"] == []


@pytest.mark.asyncio
async def test_zbrain_status_lists_down_urls_first(sqlite_db, seed) -> None:
    now = datetime(2026, 3, 4, 10, 0, 0)
    await seed(
        ZbrainUrlStatusRow(url="https://a", status="UP", status_code="200", last_refresh_time=now),
        ZbrainUrlStatusRow(url="https://b", status="down", status_code="503"),
        ZbrainUrlStatusRow(url="https://c", status="UP", status_code="200"),
        ZbrainUrlStatusRow(url="https://d", status="Connection Failure", status_code="0"),
        ZbrainUrlStatusRow(url="https://e", status=None, status_code=None),
    )

    async with sqlite_db.session() as session:
        rows = await MonitoringRepository(session).list_zbrain_status()

    assert [row.url for row in rows] == [
        "https://b",
        "https://d",
        "https://a",
        "https://c",
        "https://e",
    ]
    assert rows[2].last_refresh_time == now


@pytest.mark.asyncio
async def test_usage_queries_filter_by_year_and_month_spelling(sqlite_db, seed) -> None:
    await seed(
        S3BucketUsageRow(account_name="prod", bucket_name="logs", size_mb="50", year=2026, month="Mar"),
        S3BucketUsageRow(account_name="prod", bucket_name="media", size_mb="900", year=2026, month="Mar"),
        S3BucketUsageRow(account_name="prod", bucket_name="old", size_mb="5", year=2026, month="March"),
        R2UsageRow(payload_size_tb="61.5", class_a_requests_mm="300", year="2026", month="March"),
        R2UsageRow(payload_size_tb="1", year="2026", month="Mar"),
        R2ThresholdRow(payload_size_tb="90", class_a_requests="500", class_b_requests=""),
        ZoneUsageRow(zone_name="small", bandwidth_tb="2", requests_m="10", is_china="0", year=2026, month="Mar"),
        ZoneUsageRow(zone_name="big", bandwidth_tb="20", requests_m="5", is_china="1", year=2026, month="Mar"),
        ZoneThresholdRow(requests_m="1000", bandwidth_tb="6", is_china="1"),
        AwsCostReportRow(account_name="zeta", current_cost="10", baseline_cost="100", year=2026, month="March"),
        AwsCostReportRow(account_name="alpha", current_cost="70", baseline_cost="100", year=2026, month="March"),
        AwsCostReportRow(account_name="alpha", current_cost="99", baseline_cost="100", year=2025, month="March"),
    )

    async with sqlite_db.session() as session:
        repo = UsageRepository(session)
        buckets = await repo.list_s3_buckets(2026, "Mar")
        r2_rows = await repo.list_r2_usage(2026, "March")
        missing_r2 = await repo.list_r2_usage(2026, "April")
        thresholds = await repo.get_r2_thresholds()
        zones = await repo.list_zone_usage(2026, "Mar")
        zones_by_id = await repo.list_zone_usage(2026, "Mar", by_bandwidth=False)
        zone_thresholds = await repo.list_zone_thresholds()
        costs_by_cost = await repo.list_aws_costs(2026, "March")
        costs_by_name = await repo.list_aws_costs(2026, "March", by_cost=False)

    assert [bucket.bucket_name for bucket in buckets] == ["media", "logs"]
    assert buckets[0].size_mb == 900.0
    assert len(r2_rows) == 1
    assert r2_rows[0].payload_size_tb == 61.5
    assert r2_rows[0].class_b_requests_mm is None
    assert missing_r2 == []
    assert thresholds is not None
    assert thresholds.payload_size_tb == 90.0
    assert thresholds.class_b_requests is None
    assert [zone.zone_name for zone in zones] == ["big", "small"]
    assert [zone.zone_name for zone in zones_by_id] == ["small", "big"]
    assert zones[0].is_china is True
    assert zones[1].is_china is False
    assert zone_thresholds[0].is_china is True
    assert zone_thresholds[0].bandwidth_tb == 6.0
    assert [cost.account_name for cost in costs_by_cost] == ["alpha", "zeta"]
    assert [cost.current_cost for cost in costs_by_name] == [70.0, 10.0]


@pytest.mark.asyncio
async def test_empty_tables_return_empty_results(sqlite_db) -> None:
    async with sqlite_db.session() as session:
        repo = UsageRepository(session)
        assert await repo.list_s3_buckets(2026, "Jan") == []
        assert await repo.list_r2_usage(2026, "January") == []
        assert await repo.get_r2_thresholds() is None
        assert await repo.list_zone_thresholds() == []


@pytest.mark.asyncio
async def test_query_failures_surface_as_data_fetch_error(tmp_path: Path) -> None:
    # No tables created: every query fails at the driver.
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    await db.connect()
    try:
        with pytest.raises(DataFetchError) as usage_exc:
            async with db.session() as session:
                await UsageRepository(session).list_aws_costs(2026, "March")
        assert usage_exc.value.source == "AWS cost"
        assert str(usage_exc.value).startswith("Failed to fetch AWS cost data")
        assert usage_exc.value.__cause__ is not None

        with pytest.raises(DataFetchError) as panel_exc:
            async with db.session() as session:
                await MonitoringRepository(session).list_panel(ServerPanel.RP_SERVERS)
        assert panel_exc.value.source == "rp servers"
    finally:
        await db.disconnect()


@pytest.mark.asyncio
async def test_read_sessions_discard_uncommitted_writes(sqlite_db) -> None:
    async with sqlite_db.session() as session:
        session.add(ZbrainUrlStatusRow(url="https://scratch", status="UP"))
        await session.flush()
        assert [row.url for row in await MonitoringRepository(session).list_zbrain_status()] == [
            "https://scratch"
        ]

    async with sqlite_db.session() as session:
        assert await MonitoringRepository(session).list_zbrain_status() == []
