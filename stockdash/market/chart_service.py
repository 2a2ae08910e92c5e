"""Wire a quote source to the normalizer, indicator engine and classifier."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from stockdash.config.models import IndicatorConfig
from stockdash.core.enums import TimePeriod
from stockdash.core.errors import MarketDataError
from stockdash.core.types import Symbol
from stockdash.data_feed.base import QuoteSource

from .indicators import compute_chart_overlays
from .models import MarketStatus, OverlayPoint
from .normalizer import normalize_points
from .session import classify_market_session


@dataclass(slots=True)
class ChartSnapshot:
    """Everything the dashboard needs to draw one symbol's chart panel."""

    symbol: Symbol
    period: TimePeriod
    price: Optional[float]
    points: List[OverlayPoint]
    status: MarketStatus
    latest_volume: Optional[float] = None
    latency_ms: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.points

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "period": self.period.value,
            "price": self.price,
            "chartData": [point.to_dict() for point in self.points],
            "marketStatus": self.status.to_dict(),
            "volume": self.latest_volume,
        }


@dataclass(slots=True)
class ChartService:
    """Build :class:`ChartSnapshot` objects; holds no cache between calls."""

    source: QuoteSource
    indicator_config: IndicatorConfig = field(default_factory=IndicatorConfig)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def load(self, symbol: str, period: TimePeriod = TimePeriod.ONE_MONTH) -> ChartSnapshot:
        """Fetch, normalize and decorate the chart for ``symbol``.

        Market data errors (unknown symbol, malformed arrays, transport
        failures) propagate to the caller.
        """

        fetched = self.source.fetch_chart(Symbol(symbol.strip().upper()), period)
        response = fetched.data
        points = normalize_points(response.points, period.max_points)
        if not points:
            self.logger.info(
                "Empty series after normalization",
                extra={"symbol": response.symbol, "raw_points": len(response.points)},
            )
        overlays = compute_chart_overlays(points, self.indicator_config)
        status = classify_market_session(response.market_state, response.trading_period)
        self.logger.debug(
            "Chart loaded",
            extra={
                "symbol": response.symbol,
                "raw_points": len(response.points),
                "points": len(points),
                "latency_ms": round(fetched.latency_ms, 2),
            },
        )
        return ChartSnapshot(
            symbol=response.symbol,
            period=period,
            price=response.regular_market_price,
            points=overlays,  # type: ignore[arg-type]
            status=status,
            latest_volume=response.latest_volume,
            latency_ms=fetched.latency_ms,
        )

    def refresh(self, symbols: Iterable[str], period: TimePeriod = TimePeriod.ONE_MONTH) -> Dict[Symbol, ChartSnapshot]:
        """Load every symbol; failed symbols are logged and left out."""

        snapshots: Dict[Symbol, ChartSnapshot] = {}
        for symbol in symbols:
            try:
                snapshot = self.load(symbol, period)
            except MarketDataError as exc:
                self.logger.warning("Failed to refresh %s: %s", symbol, exc)
                continue
            snapshots[snapshot.symbol] = snapshot
        return snapshots


__all__ = ["ChartService", "ChartSnapshot"]
