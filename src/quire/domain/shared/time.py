"""UTC clock helpers.

All timestamps are stored as UTC. SQLite returns them naive, so values read
back from storage pass through :func:`ensure_tz_aware` before they reach an
aggregate.
"""

from datetime import datetime, timezone
from typing import Optional, overload


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


@overload
def ensure_tz_aware(dt: datetime) -> datetime: ...


@overload
def ensure_tz_aware(dt: None) -> None: ...


def ensure_tz_aware(dt: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to a naive datetime; ``None`` passes through."""
    if dt is None or dt.tzinfo is not None:
        return dt
    return dt.replace(tzinfo=timezone.utc)
