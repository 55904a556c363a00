"""Shared contract enums and lenient field types."""

from datetime import datetime
from enum import StrEnum
from typing import Annotated

from pydantic import BeforeValidator

from sre_shared.domain.numbers import coerce_number, is_china_flag


class MetricFamily(StrEnum):
    """Monthly usage tables that feed the forecast panels."""

    AWS_COST = "aws_cost"
    CLOUDFLARE_R2 = "cloudflare_r2"
    CLOUDFLARE_ZONES = "cloudflare_zones"
    S3_BUCKETS = "s3_buckets"


class ServerPanel(StrEnum):
    """Live status panels, in the order the dashboard rotates through them."""

    RP_SERVERS = "rp servers"
    AEM_SERVERS = "aem servers"
    EESOF_APPLICATIONS = "eesof applications"
    RUBY_APPLICATIONS = "ruby applications"
    PING_MONITOR = "ping monitor"
    NEW_RELIC_MONITORS = "new relic monitors"
    SSL_CERTIFICATES = "ssl certificates"


class StatusColor(StrEnum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


# Numeric column that may arrive as text, blank or garbage; unusable -> None.
LenientFloat = Annotated[float | None, BeforeValidator(coerce_number)]

# Is_China column stored as 1/0 or '1'/'0'.
ChinaFlag = Annotated[bool, BeforeValidator(is_china_flag)]

Timestamp = datetime | str | None


__all__ = [
    "ChinaFlag",
    "LenientFloat",
    "MetricFamily",
    "ServerPanel",
    "StatusColor",
    "Timestamp",
]
