"""Repository for the monthly usage and cost tables."""

from __future__ import annotations

from sqlalchemy import Float, cast, select
from sqlalchemy.ext.asyncio import AsyncSession
from sre_shared.contracts import (
    AwsCost,
    R2Thresholds,
    R2Usage,
    S3BucketUsage,
    ZoneThreshold,
    ZoneUsage,
)

from sre_server.db.repositories.utils import fetch_mappings
from sre_server.db.tables import (
    AwsCostReportRow,
    R2ThresholdRow,
    R2UsageRow,
    S3BucketUsageRow,
    ZoneThresholdRow,
    ZoneUsageRow,
)


class UsageRepository:
    """
    Read-only queries over the per-month usage tables.

    ``month`` arguments are passed through verbatim: each table has its own
    spelling convention (see ``MonthNameStyle``) and the caller picks it.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_s3_buckets(self, year: int, month: str) -> list[S3BucketUsage]:
        query = (
            select(
                S3BucketUsageRow.account_name.label("account_name"),
                S3BucketUsageRow.bucket_name.label("bucket_name"),
                S3BucketUsageRow.size_mb.label("size_mb"),
                S3BucketUsageRow.retention.label("retention"),
            )
            .where(S3BucketUsageRow.year == year, S3BucketUsageRow.month == month)
            .order_by(cast(S3BucketUsageRow.size_mb, Float).desc())
        )
        rows = await fetch_mappings(self._session, query, source="S3 usage")
        return [S3BucketUsage.model_validate(dict(row)) for row in rows]

    async def list_r2_usage(self, year: int, month: str) -> list[R2Usage]:
        query = (
            select(
                R2UsageRow.object_count.label("object_count"),
                R2UsageRow.payload_size_tb.label("payload_size_tb"),
                R2UsageRow.class_a_requests_mm.label("class_a_requests_mm"),
                R2UsageRow.class_b_requests_mm.label("class_b_requests_mm"),
                R2UsageRow.last_refresh_time.label("last_refresh_time"),
            )
            # YEAR is a text column in this table.
            .where(R2UsageRow.year == str(year), R2UsageRow.month == month)
            .order_by(R2UsageRow.id)
        )
        rows = await fetch_mappings(self._session, query, source="Cloudflare R2 usage")
        return [R2Usage.model_validate(dict(row)) for row in rows]

    async def get_r2_thresholds(self) -> R2Thresholds | None:
        query = (
            select(
                R2ThresholdRow.payload_size_tb.label("payload_size_tb"),
                R2ThresholdRow.class_a_requests.label("class_a_requests"),
                R2ThresholdRow.class_b_requests.label("class_b_requests"),
            )
            .order_by(R2ThresholdRow.id)
            .limit(1)
        )
        rows = await fetch_mappings(self._session, query, source="R2 thresholds")
        return R2Thresholds.model_validate(dict(rows[0])) if rows else None

    async def list_zone_usage(
        self, year: int, month: str, *, by_bandwidth: bool = True
    ) -> list[ZoneUsage]:
        query = select(
            ZoneUsageRow.account_name.label("account_name"),
            ZoneUsageRow.zone_name.label("zone_name"),
            ZoneUsageRow.requests_m.label("requests_m"),
            ZoneUsageRow.bandwidth_tb.label("bandwidth_tb"),
            ZoneUsageRow.is_china.label("is_china"),
            ZoneUsageRow.refresh_time_ist.label("refresh_time_ist"),
        ).where(ZoneUsageRow.year == year, ZoneUsageRow.month == month)
        if by_bandwidth:
            query = query.order_by(cast(ZoneUsageRow.bandwidth_tb, Float).desc())
        else:
            query = query.order_by(ZoneUsageRow.id)
        rows = await fetch_mappings(self._session, query, source="Cloudflare zone usage")
        return [ZoneUsage.model_validate(dict(row)) for row in rows]

    async def list_zone_thresholds(self) -> list[ZoneThreshold]:
        query = select(
            ZoneThresholdRow.requests_m.label("requests_m"),
            ZoneThresholdRow.bandwidth_tb.label("bandwidth_tb"),
            ZoneThresholdRow.is_china.label("is_china"),
        ).order_by(ZoneThresholdRow.id)
        rows = await fetch_mappings(self._session, query, source="zone thresholds")
        return [ZoneThreshold.model_validate(dict(row)) for row in rows]

    async def list_aws_costs(
        self, year: int, month: str, *, by_cost: bool = True
    ) -> list[AwsCost]:
        """
        AWS cost rows for one month.

        Sorted by current cost (largest first) for the usage table, or by
        account name for forecasting.
        """
        query = select(
            AwsCostReportRow.account_name.label("account_name"),
            AwsCostReportRow.account_id.label("account_id"),
            AwsCostReportRow.baseline_cost.label("baseline_cost"),
            AwsCostReportRow.current_cost.label("current_cost"),
        ).where(AwsCostReportRow.year == year, AwsCostReportRow.month == month)
        if by_cost:
            query = query.order_by(cast(AwsCostReportRow.current_cost, Float).desc())
        else:
            query = query.order_by(AwsCostReportRow.account_name)
        rows = await fetch_mappings(self._session, query, source="AWS cost")
        return [AwsCost.model_validate(dict(row)) for row in rows]
