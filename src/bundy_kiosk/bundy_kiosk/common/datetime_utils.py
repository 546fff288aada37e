from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def now_utc() -> datetime:
    """Current UTC time as a naive datetime (matches MySQL DATETIME columns).

    Note: Wrapped so ledgers can take a clock and tests can pin time.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def not_before(now: datetime, floor: Optional[datetime]) -> datetime:
    """Clamp ``now`` so an employee's timestamps never run backwards."""
    if floor is not None and now < floor:
        return floor
    return now


def isoformat_utc(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat(timespec="microseconds") + "Z"
