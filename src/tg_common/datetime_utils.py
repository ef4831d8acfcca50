"""UTC helpers shared by ticket validation and the response schemas.

Every datetime that crosses a module boundary is timezone-aware UTC.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    return datetime.now(UTC)


def ensure_utc(value: datetime) -> datetime:
    """Read a naive datetime as UTC; shift an aware one onto UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def to_iso(value: datetime | None) -> str | None:
    """ISO8601 in UTC, or None when the column has not been populated yet."""
    if value is None:
        return None
    return ensure_utc(value).isoformat()
