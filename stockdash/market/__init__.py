"""Chart series modeling package.

Normalization of raw provider records, indicator overlays and market session
classification. Everything here except :mod:`.chart_service` is pure.
"""

from .indicators import compute_bollinger_bands, compute_chart_overlays, compute_rolling_stddev, compute_sma
from .models import ChartPoint, IndicatorBundle, MarketStatus, OverlayPoint
from .normalizer import normalize_chart_result, normalize_points
from .session import classify_market_session, derive_session_state, format_market_status

__all__ = [
    "ChartPoint",
    "IndicatorBundle",
    "MarketStatus",
    "OverlayPoint",
    "classify_market_session",
    "compute_bollinger_bands",
    "compute_chart_overlays",
    "compute_rolling_stddev",
    "compute_sma",
    "derive_session_state",
    "format_market_status",
    "normalize_chart_result",
    "normalize_points",
]
