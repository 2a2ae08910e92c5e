"""Utilities for dealing with provider timestamps.

The quote provider reports epoch seconds. Chart dates are taken from the UTC
day boundary, while the "last update" label shown next to the market status is
local wall-clock time. Labels use fixed English names so they do not depend on
the process locale.
"""
from __future__ import annotations

import time
from datetime import date, datetime, timezone

from .types import Timestamp

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def now_utc() -> datetime:
    """Return the current UTC datetime with tzinfo."""

    return datetime.now(timezone.utc)


def now_epoch_seconds() -> Timestamp:
    """Return the current wall-clock time as whole epoch seconds."""

    return Timestamp(int(time.time()))


def utc_datetime(timestamp: float) -> datetime:
    """Convert epoch seconds to an aware UTC datetime."""

    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def weekday_label(day: date) -> str:
    """Return the short weekday name (``Mon`` .. ``Sun``)."""

    return _WEEKDAYS[day.weekday()]


def format_chart_date(day: date) -> str:
    """Render a chart axis label such as ``Jan 5, 2024``."""

    return f"{_MONTHS[day.month - 1]} {day.day}, {day.year}"


def format_clock_label(moment: datetime | None = None) -> str:
    """Render a wall-clock label such as ``3:04:05 PM`` in local time."""

    current = (moment or now_utc()).astimezone()
    hour = current.hour % 12 or 12
    suffix = "PM" if current.hour >= 12 else "AM"
    return f"{hour}:{current.minute:02d}:{current.second:02d} {suffix}"
