from datetime import date, datetime
from typing import Optional, Union
from zoneinfo import ZoneInfo

from monhub.config import settings
from monhub.constants import (
    DATE_FORMAT_SHORT,
    DATE_FORMAT_WITH_TIME,
    FRENCH_MONTHS,
    TIME_FORMAT,
)

DateLike = Union[datetime, date, str, None]

LOCAL_TZ = ZoneInfo(settings.TIMEZONE)


def _to_datetime(value: DateLike) -> Optional[datetime]:
    """Parse a backend date; aware values are shown in the local timezone."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    else:
        try:
            dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    return dt.astimezone(LOCAL_TZ) if dt.tzinfo else dt


def local_date(value: DateLike) -> Optional[date]:
    dt = _to_datetime(value)
    return dt.date() if dt else None


def format_date(value: DateLike, default: str = "") -> str:
    """DD/MM/YYYY"""
    dt = _to_datetime(value)
    return dt.strftime(DATE_FORMAT_SHORT) if dt else default


def format_short_date(value: DateLike, default: str = "") -> str:
    """DD/MM/YY, used for renewal dates in the admin tables."""
    dt = _to_datetime(value)
    return dt.strftime("%d/%m/%y") if dt else default


def format_day_month(value: DateLike, default: str = "") -> str:
    dt = _to_datetime(value)
    return dt.strftime("%d/%m") if dt else default


def format_date_time(value: DateLike, default: str = "") -> str:
    dt = _to_datetime(value)
    return dt.strftime(DATE_FORMAT_WITH_TIME) if dt else default


def format_time_only(value: DateLike, default: str = "") -> str:
    dt = _to_datetime(value)
    return dt.strftime(TIME_FORMAT) if dt else default


def format_long_date(value: DateLike, default: str = "") -> str:
    """e.g. 5 mars 2025"""
    dt = _to_datetime(value)
    if not dt:
        return default
    return f"{dt.day} {FRENCH_MONTHS[dt.month - 1]} {dt.year}"


def format_month_year(value: DateLike, default: str = "") -> str:
    dt = _to_datetime(value)
    if not dt:
        return default
    return f"{FRENCH_MONTHS[dt.month - 1]} {dt.year}"


def day_label(value: DateLike, today: Optional[date] = None) -> str:
    """Separator label for a chat day group."""
    dt = _to_datetime(value)
    if not dt:
        return ""
    today = today or datetime.now(LOCAL_TZ).date()
    delta = (today - dt.date()).days
    if delta == 0:
        return "Aujourd'hui"
    if delta == 1:
        return "Hier"
    return format_long_date(dt)
