"""UTC datetime utilities."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def minutes_since(moment: datetime, now: datetime) -> float:
    """Minutes elapsed from `moment` to `now`; negative when `moment` is in the future."""
    return (now - moment).total_seconds() / 60
