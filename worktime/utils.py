from __future__ import annotations

import datetime as dt
from typing import Callable, Optional

from .models import DateStyle

Clock = Callable[[], dt.datetime]
DateFormatter = Callable[[dt.datetime, DateStyle], str]

_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def system_clock() -> dt.datetime:
    return dt.datetime.now()


def align_to(value: dt.datetime, reference: dt.datetime) -> dt.datetime:
    """Return ``value`` with the same tz-awareness as ``reference``."""
    if reference.tzinfo is not None:
        if value.tzinfo is None:
            value = value.astimezone()
        return value.astimezone(reference.tzinfo)
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def text_or_empty(value: Optional[str]) -> str:
    return "" if is_blank(value) else value  # type: ignore[return-value]


def reset_to_midnight(value: dt.datetime) -> dt.datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def format_date(value: dt.datetime, style: DateStyle) -> str:
    """Fixed, locale-free date rendering used when no formatter is injected."""
    if style is DateStyle.SHORT:
        return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
    month = _MONTH_NAMES[value.month - 1]
    if style is DateStyle.MEDIUM:
        month = month[:3]
    return f"{value.day} {month} {value.year:04d}"
