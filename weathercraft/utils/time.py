"""Time utilities (project timezone)."""

from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo


def project_tz(name: str) -> tzinfo:
    """Resolve an IANA timezone name, e.g. 'America/Denver'."""
    return ZoneInfo(name)


def from_unix(ts: int | float) -> datetime:
    """Provider epoch seconds -> aware UTC datetime."""
    return datetime.fromtimestamp(ts, tz=timezone.utc)


def now_utc() -> datetime:
    return datetime.now(timezone.utc)

