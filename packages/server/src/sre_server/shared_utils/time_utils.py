from datetime import UTC, date, datetime, tzinfo


def utc_now() -> datetime:
    return datetime.now(UTC)


def today_in(tz: tzinfo) -> date:
    """Calendar date in ``tz``; decides which month is "current" for reports."""
    return utc_now().astimezone(tz).date()
