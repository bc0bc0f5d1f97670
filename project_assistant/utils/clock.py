"""Time helpers."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current UTC time, naive, as the TIMESTAMP columns store it."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
