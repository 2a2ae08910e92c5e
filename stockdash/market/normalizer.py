"""Turn raw provider records into the validated daily chart series.

Default substitution policy for a retained point (close present and > 0):

* ``open``, ``high``, ``low`` fall back to ``close`` when absent;
* ``volume`` falls back to ``0`` when absent;
* an explicit ``0`` open is kept as given, so ``change_percent`` is ``0``.

Points with a missing, non-numeric or non-positive close are dropped, never
interpolated or carried forward. The surviving series keeps the provider's
order and is tail-truncated to the requested history window.
"""
from __future__ import annotations

import math
from typing import Any, Iterable, List, Optional

from stockdash.core.time_utils import format_chart_date, utc_datetime, weekday_label
from stockdash.core.types import Symbol, Timestamp
from stockdash.data_feed.quotes import RawQuotePoint, parse_chart_result

from .models import ChartPoint


def _as_number(value: Any) -> Optional[float]:
    """Return ``value`` as a finite float, or ``None`` if it is not one."""

    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _or_default(value: Any, default: float) -> float:
    number = _as_number(value)
    return default if number is None else number


def normalize_point(raw: RawQuotePoint) -> Optional[ChartPoint]:
    """Return the normalized point for ``raw`` or ``None`` if it is dropped."""

    close = _as_number(raw.close)
    if close is None or close <= 0:
        return None
    timestamp = _as_number(raw.timestamp)
    if timestamp is None:
        return None
    try:
        moment = utc_datetime(timestamp)
    except (OverflowError, OSError, ValueError):
        return None
    open_ = _or_default(raw.open, close)
    change = close - open_
    change_percent = (change / open_) * 100 if open_ != 0 else 0.0
    day = moment.date()
    return ChartPoint(
        timestamp=Timestamp(int(timestamp)),
        date=day.isoformat(),
        price=close,
        open=open_,
        high=_or_default(raw.high, close),
        low=_or_default(raw.low, close),
        volume=_or_default(raw.volume, 0.0),
        change=change,
        change_percent=change_percent,
        day_of_week=weekday_label(day),
        formatted_date=format_chart_date(day),
    )


def normalize_points(raw_points: Iterable[RawQuotePoint], max_points: int) -> List[ChartPoint]:
    """Normalize ``raw_points`` and keep the most recent ``max_points`` of them."""

    if max_points < 1:
        raise ValueError(f"max_points must be positive, got {max_points}")
    points: List[ChartPoint] = []
    for raw in raw_points:
        point = normalize_point(raw)
        if point is not None:
            points.append(point)
    if len(points) > max_points:
        points = points[-max_points:]
    return points


def normalize_chart_result(symbol: Symbol, result: Any, max_points: int) -> List[ChartPoint]:
    """Parse one provider ``chart.result`` entry and normalize its series."""

    response = parse_chart_result(symbol, result)
    return normalize_points(response.points, max_points)


__all__ = ["normalize_chart_result", "normalize_point", "normalize_points"]
