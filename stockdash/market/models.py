"""Domain models for the chart series, its overlays and the session status."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from stockdash.core.types import Timestamp


@dataclass(frozen=True, slots=True)
class ChartPoint:
    """Normalized daily point; ``price`` is the close and always positive."""

    timestamp: Timestamp
    date: str
    price: float
    open: float
    high: float
    low: float
    volume: float
    change: float
    change_percent: float
    day_of_week: str
    formatted_date: str

    @property
    def close(self) -> float:
        return self.price

    def to_dict(self) -> Dict[str, Any]:
        """Presentation representation with the chart widget's key names."""

        return {
            "date": self.date,
            "price": self.price,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "volume": self.volume,
            "change": self.change,
            "changePercent": self.change_percent,
            "dayOfWeek": self.day_of_week,
            "formattedDate": self.formatted_date,
        }


@dataclass(frozen=True, slots=True)
class IndicatorBundle:
    """Overlay readings for one point; ``None`` until the window is seated."""

    vol_sma: Optional[float] = None
    sma50: Optional[float] = None
    sma200: Optional[float] = None
    bb_mid: Optional[float] = None
    bb_upper: Optional[float] = None
    bb_lower: Optional[float] = None

    def to_dict(self) -> Dict[str, Optional[float]]:
        return {
            "volSMA": self.vol_sma,
            "sma50": self.sma50,
            "sma200": self.sma200,
            "bbMid": self.bb_mid,
            "bbUpper": self.bb_upper,
            "bbLower": self.bb_lower,
        }


@dataclass(frozen=True, slots=True)
class OverlayPoint(ChartPoint):
    """Chart point merged with its indicator readings at the same index."""

    vol_sma: Optional[float] = None
    sma50: Optional[float] = None
    sma200: Optional[float] = None
    bb_mid: Optional[float] = None
    bb_upper: Optional[float] = None
    bb_lower: Optional[float] = None

    @classmethod
    def merge(cls, point: ChartPoint, bundle: IndicatorBundle) -> "OverlayPoint":
        return cls(
            timestamp=point.timestamp,
            date=point.date,
            price=point.price,
            open=point.open,
            high=point.high,
            low=point.low,
            volume=point.volume,
            change=point.change,
            change_percent=point.change_percent,
            day_of_week=point.day_of_week,
            formatted_date=point.formatted_date,
            vol_sma=bundle.vol_sma,
            sma50=bundle.sma50,
            sma200=bundle.sma200,
            bb_mid=bundle.bb_mid,
            bb_upper=bundle.bb_upper,
            bb_lower=bundle.bb_lower,
        )

    @property
    def indicators(self) -> IndicatorBundle:
        return IndicatorBundle(
            vol_sma=self.vol_sma,
            sma50=self.sma50,
            sma200=self.sma200,
            bb_mid=self.bb_mid,
            bb_upper=self.bb_upper,
            bb_lower=self.bb_lower,
        )

    def to_dict(self) -> Dict[str, Any]:
        payload = ChartPoint.to_dict(self)
        payload.update(self.indicators.to_dict())
        return payload


@dataclass(frozen=True, slots=True)
class MarketStatus:
    """Whether the latest quote was taken while the market was open."""

    is_market_open: bool
    market_state: str
    last_update: str

    @property
    def label(self) -> str:
        return "Open" if self.is_market_open else "Closed"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isMarketOpen": self.is_market_open,
            "marketState": self.market_state,
            "lastUpdate": self.last_update,
        }


__all__ = ["ChartPoint", "IndicatorBundle", "MarketStatus", "OverlayPoint"]
