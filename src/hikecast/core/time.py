"""
Time parsing and timezone normalization.

HikeCast treats upstream timestamps as timezone-aware datetimes and only formats
them into the configured local zone at the edge (`HH:MM` strings in `SunTimes`).
"""

from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

HHMM_FORMAT = "%H:%M"


def ensure_tz(dt: datetime, tz: str = "UTC") -> datetime:
    """Ensure `dt` has tzinfo; attach `tz` if naive."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=ZoneInfo(tz))
    return dt


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_datetime(value: str, tz: str = "UTC") -> datetime:
    """Parse ISO-8601 datetime string and ensure tzinfo is present.

    Notes:
    - Accepts a trailing `Z` (UTC) and converts it to `+00:00` for `fromisoformat`.
    - If the parsed value is naive, the provided `tz` is attached.

    Raises:
        ValueError: If `value` is not an ISO-8601 datetime.
    """
    if not isinstance(value, str):
        raise ValueError(f"Expected an ISO-8601 string, got {type(value).__name__}")
    value = value.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    dt = datetime.fromisoformat(value)
    return ensure_tz(dt, tz)


def to_local(dt: datetime, tz: str) -> datetime:
    return ensure_tz(dt).astimezone(ZoneInfo(tz))


def format_hhmm(dt: datetime) -> str:
    return dt.strftime(HHMM_FORMAT)
