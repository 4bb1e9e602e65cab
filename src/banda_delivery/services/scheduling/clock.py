"""Local clock helpers shared by the slot policies."""

from __future__ import annotations

import re
from datetime import datetime, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from ...config import settings

CLOCK_PATTERN = re.compile(r"(\d{1,2}):(\d{2})")


def local_timezone(name: Optional[str] = None) -> tzinfo:
    return ZoneInfo(name or settings.timezone)


def local_now(now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> datetime:
    """Timezone-aware "now" on the local clock; naive inputs are taken as local."""

    tz = tz or local_timezone()
    if now is None:
        return datetime.now(tz)
    if now.tzinfo is None:
        return now.replace(tzinfo=tz)
    return now.astimezone(tz)


def parse_iso_datetime(value: str, tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """Parse an ISO-8601 string onto the local clock, or ``None`` if malformed.

    Datetimes that cannot be shifted onto the local clock count as malformed.
    """

    try:
        return local_now(datetime.fromisoformat(value), tz)
    except (TypeError, ValueError, OverflowError):
        return None


def parse_clock(value: str) -> Optional[tuple[int, int]]:
    """``(hours, minutes)`` for an ``H:MM``/``HH:MM`` label, or ``None`` if it is not a valid time of day."""

    match = CLOCK_PATTERN.fullmatch(value.strip()) if isinstance(value, str) else None
    if match is None:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return hours, minutes


def js_weekday(moment: datetime) -> int:
    """Day of week with 0=Sunday, matching the business-day configuration."""
    return (moment.weekday() + 1) % 7
