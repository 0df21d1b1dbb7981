"""UTC datetime utilities."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def to_storage(dt: datetime) -> str:
    """Fixed-width ISO-8601 so stored timestamps sort lexicographically."""
    return dt.astimezone(timezone.utc).isoformat(timespec="microseconds")


def from_storage(value: str | None) -> datetime | None:
    if value is None:
        return None
    return datetime.fromisoformat(value)


def clock_label(dt: datetime) -> str:
    """24-hour HH:MM label used for 'Live 14:05' style badges."""
    return dt.strftime("%H:%M")
