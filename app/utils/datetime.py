"""Timezone helpers for the timestamps stored with rules and violations.

Every timestamp column is written as a naive value expressed in the
application timezone (``APP_TIMEZONE``); entities handed to callers carry the
timezone again. Date range filters are interpreted in the same timezone.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.config import get_settings

DEFAULT_TIMEZONE: Final[str] = "UTC"
_UTC_OFFSET: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the timezone configured through ``APP_TIMEZONE``.

    Accepts IANA names (``America/New_York``) as well as fixed offsets such as
    ``UTC-05:00``. Unknown values fall back to UTC.
    """

    configured = (get_settings().app_timezone or "").strip()
    return _parse_timezone(configured or DEFAULT_TIMEZONE)


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Return the current application time ready to be stored in a column."""

    return now_in_app_timezone().replace(tzinfo=None)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Attach the application timezone to stored values, or convert aware ones."""

    if value is None:
        return None
    tz = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def start_of_day(day: date) -> datetime:
    """First stored timestamp belonging to ``day``."""

    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    """Last stored timestamp belonging to ``day``."""

    return datetime.combine(day, time.max)


def _parse_timezone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        pass
    match = _UTC_OFFSET.match(name)
    if match is None:
        return timezone.utc
    offset = timedelta(
        hours=int(match.group("hours")), minutes=int(match.group("minutes") or 0)
    )
    return timezone(-offset if match.group("sign") == "-" else offset)
