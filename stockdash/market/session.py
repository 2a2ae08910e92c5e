"""Market session classification for the latest quote.

Precedence, first match wins: ``REGULAR`` → open, ``PRE``/``POST`` → open,
``CLOSED`` → closed, then a comparison of the current time against the
provider's regular trading window, else closed. The classifier never raises;
anything it cannot read degrades to closed.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping, Optional

from stockdash.core.enums import MarketSessionState
from stockdash.core.time_utils import format_clock_label, now_epoch_seconds, utc_datetime

from .models import MarketStatus

LOGGER = logging.getLogger(__name__)

_OPEN_STATES = (MarketSessionState.REGULAR.value, MarketSessionState.PRE.value, MarketSessionState.POST.value)


def _is_epoch(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _regular_window(trading_period: Any) -> Optional[tuple[float, float]]:
    regular = trading_period.get("regular") if trading_period else None
    if not regular:
        return None
    start = regular.get("start")
    end = regular.get("end")
    if _is_epoch(start) and _is_epoch(end):
        return float(start), float(end)
    return None


def classify_market_session(
    market_state: Optional[str],
    trading_period: Optional[Mapping[str, Any]] = None,
    *,
    now: Optional[float] = None,
) -> MarketStatus:
    """Return whether the market is open for ``market_state``/``trading_period``.

    ``now`` is epoch seconds and defaults to the current wall-clock time; it
    only matters when the state token is missing or unrecognized.
    """

    current = now_epoch_seconds() if now is None else now
    reported = str(market_state) if market_state else MarketSessionState.UNKNOWN.value
    if market_state in _OPEN_STATES:
        is_open = True
    elif market_state == MarketSessionState.CLOSED.value:
        is_open = False
    else:
        is_open = False
        try:
            window = _regular_window(trading_period)
            if window is not None:
                start, end = window
                is_open = start <= current <= end
        except Exception as exc:
            LOGGER.debug("Trading period comparison failed: %s", exc)
            is_open = False
    return MarketStatus(
        is_market_open=is_open,
        market_state=reported,
        last_update=_clock_label(now),
    )


def _clock_label(now: Optional[float]) -> str:
    moment: Optional[datetime] = None
    if now is not None:
        try:
            moment = utc_datetime(now)
        except (OverflowError, OSError, ValueError):
            moment = None
    return format_clock_label(moment)


def derive_session_state(
    trading_period: Optional[Mapping[str, Any]],
    *,
    now: Optional[float] = None,
) -> Optional[MarketSessionState]:
    """Infer ``REGULAR``/``PRE``/``POST`` from the regular trading window.

    Returns ``None`` when no usable window is present.
    """

    current = now_epoch_seconds() if now is None else now
    try:
        window = _regular_window(trading_period)
    except Exception as exc:
        LOGGER.debug("Trading period unreadable: %s", exc)
        return None
    if window is None:
        return None
    start, end = window
    if start <= current <= end:
        return MarketSessionState.REGULAR
    return MarketSessionState.PRE if current < start else MarketSessionState.POST


def format_market_status(status: MarketStatus) -> str:
    """Return ``Open`` or ``Closed`` for the status badge."""

    return status.label


__all__ = ["classify_market_session", "derive_session_state", "format_market_status"]
