"""Date helpers for match rows."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from zoneinfo import ZoneInfo

UTC = ZoneInfo("UTC")


def parse_iso(value: Any) -> Optional[datetime]:
    """Parse a Supabase timestamp (``Z`` or offset suffix) into an aware datetime."""

    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    else:
        try:
            dt = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def utc_iso(dt: datetime | None) -> str | None:
    """Return an ISO 8601 string in UTC for ``dt`` (tolerates naive input)."""

    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat()


def to_date(value: Any) -> Optional[date]:
    """Calendar date of a stored match timestamp, for pre-filling the date input."""

    dt = parse_iso(value)
    return dt.date() if dt else None


def format_match_date(value: Any) -> str:
    """Human readable match date, e.g. ``04 Jul 2024``; ``-`` when unparseable."""

    dt = parse_iso(value)
    if dt is None:
        return "-"
    return dt.strftime("%d %b %Y")


__all__ = ["UTC", "format_match_date", "parse_iso", "to_date", "utc_iso"]
