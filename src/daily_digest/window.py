"""Time window calculation and client-side record filtering."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

DEFAULT_HOURS = 24


@dataclass(frozen=True)
class Window:
    hours: int
    since: datetime


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def compute_window(hours: int = DEFAULT_HOURS, now: datetime | None = None) -> Window:
    """Return the window that starts ``hours`` before ``now``.

    Non-positive hour counts are accepted and yield a start at or after now.
    """
    now = (now or utc_now()).astimezone(timezone.utc).replace(microsecond=0)
    return Window(hours=hours, since=now - timedelta(hours=hours))


def format_timestamp(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def format_date(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%d")


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse a GitHub timestamp.

    Missing values and the zero time ``0001-01-01T00:00:00Z`` (what gh prints
    for a field that was never set) come back as ``None``. Anything else that
    is not ISO 8601 raises ``ValueError``.
    """
    if not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    if dt.year == 1:
        return None
    return dt


def is_before_window(ts: datetime | None, since: datetime) -> bool:
    """True when ``ts`` is known and strictly earlier than ``since``.

    gh's search qualifiers only have day granularity, so results can reach
    back before the window start and are checked again here.
    """
    return ts is not None and ts < since
