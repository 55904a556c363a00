"""Shared route utilities."""

from sre_server.shared_utils.time_utils import today_in, utc_now

__all__ = [
    "today_in",
    "utc_now",
]
