"""Pure calendar arithmetic shared by the planning services.

Everything here works on naive calendar dates. Wall-clock time only enters
through ``local_today``, which the API layer calls with the configured zone.
"""
from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import List, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DATE_KEY_FORMAT = "%Y-%m-%d"
_DATE_KEY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def date_key(value: date | datetime) -> str:
    """Canonical ``yyyy-MM-dd`` key for a calendar day."""
    return _as_date(value).isoformat()


def parse_date_key(key: object) -> Optional[date]:
    """Parse a ``yyyy-MM-dd`` key, returning None for anything else."""
    if not isinstance(key, str) or not _DATE_KEY_RE.match(key):
        return None
    try:
        return datetime.strptime(key, DATE_KEY_FORMAT).date()
    except ValueError:
        return None


def weekday(value: date | datetime) -> int:
    """Day of week with 0 = Sunday .. 6 = Saturday."""
    return _as_date(value).isoweekday() % 7


def add_days(value: date | datetime, n: int) -> date:
    return _as_date(value) + timedelta(days=n)


def days_between(start: date | datetime, end: date | datetime) -> List[date]:
    """Every day from start to end inclusive, ascending. Empty when start > end."""
    first, last = _as_date(start), _as_date(end)
    if first > last:
        return []
    return [first + timedelta(days=offset) for offset in range((last - first).days + 1)]


def is_within_interval(value: date | datetime, start: date, end: date) -> bool:
    return start <= _as_date(value) <= end


def local_today(tz_name: str, now: Optional[datetime] = None) -> date:
    """Calendar date in ``tz_name``; unknown zones fall back to UTC."""
    try:
        zone = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        zone = ZoneInfo("UTC")
    moment = now or datetime.now(zone)
    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone(zone).date()


def week_bounds(day: date) -> Tuple[date, date]:
    """Monday..Sunday week containing ``day``."""
    start = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=6)


def month_bounds(day: date) -> Tuple[date, date]:
    start = day.replace(day=1)
    next_month = (start + timedelta(days=32)).replace(day=1)
    return start, next_month - timedelta(days=1)


def year_bounds(day: date) -> Tuple[date, date]:
    return date(day.year, 1, 1), date(day.year, 12, 31)


def month_keys(start: date, end: date) -> List[str]:
    """``yyyy-MM`` prefixes of every month touched by the interval."""
    keys: List[str] = []
    cursor = start.replace(day=1)
    while cursor <= end:
        keys.append(cursor.strftime("%Y-%m"))
        cursor = (cursor + timedelta(days=32)).replace(day=1)
    return keys
