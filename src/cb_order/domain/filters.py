"""Order list filtering by status set and recency window.

The recency window (`last=`) is parsed leniently: anything that is not
`<integer><m|h>` is ignored and no time filter applies.
"""
import re
from collections.abc import Iterable
from datetime import datetime, timedelta

from src.cb_common.datetime_utils import utc_now
from src.cb_order.domain.models import Order

_SINCE_RE = re.compile(r"^(\d+)([mh])$", re.IGNORECASE)


def parse_since(value: str | None) -> timedelta | None:
    """'90m' -> 90 minutes, '2h' -> 2 hours, anything else -> None."""
    if not value:
        return None
    match = _SINCE_RE.match(value.strip())
    if match is None:
        return None
    try:
        amount = int(match.group(1))
        if match.group(2).lower() == "h":
            return timedelta(hours=amount)
        return timedelta(minutes=amount)
    except (OverflowError, ValueError):
        # Beyond timedelta.max or the int digit limit: unusable like any other
        return None


def parse_statuses(value: str | None) -> set[str] | None:
    """Comma-separated status list -> lowercase set; None/blank -> no filter."""
    if not value:
        return None
    statuses = {s.strip().lower() for s in value.split(",") if s.strip()}
    return statuses or None


def _cutoff(now: datetime, window: timedelta) -> datetime:
    """`now - window`, clamped to the earliest representable moment."""
    try:
        return now - window
    except OverflowError:
        return datetime.min.replace(tzinfo=now.tzinfo)


def filter_orders(
    orders: Iterable[Order],
    statuses: Iterable[str] | None = None,
    since: str | timedelta | None = None,
    now: datetime | None = None,
) -> list[Order]:
    wanted = {s.strip().lower() for s in statuses} if statuses else None
    window = parse_since(since) if isinstance(since, str) or since is None else since
    cutoff = _cutoff(now or utc_now(), window) if window else None

    result: list[Order] = []
    for order in orders:
        if wanted and order.status.value.lower() not in wanted:
            continue
        if cutoff is not None and order.created_at < cutoff:
            continue
        result.append(order)
    return result
