"""UTC datetime handling for stored rows."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def normalize_to_utc(dt: datetime) -> datetime:
    """Return dt as an aware UTC datetime.

    SQLite drops tzinfo on the way back, so naive values read from a
    row are taken to be UTC. Aware values are converted.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
