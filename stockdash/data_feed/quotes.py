"""Utilities for parsing the provider's chart payload into raw quote points.

The provider answers with parallel arrays: ``timestamp[i]`` belongs to
``indicators.quote[0].close[i]`` and friends. Zipping them back together is the
only place where the payload *shape* is checked; per-point gaps (``null``
values) are left for the normalizer to filter.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence

from stockdash.core.errors import InvalidInputShape
from stockdash.core.types import JSONLike, Symbol

QUOTE_FIELDS: tuple[str, ...] = ("open", "high", "low", "close", "volume")


@dataclass(slots=True)
class RawQuotePoint:
    """Single provider record; any field may be missing."""

    timestamp: Optional[int]
    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    close: Optional[float] = None
    volume: Optional[float] = None

    @classmethod
    def from_chart_point(cls, point: Any) -> "RawQuotePoint":
        """Rebuild a raw record from an already normalized chart point."""

        return cls(
            timestamp=point.timestamp,
            open=point.open,
            high=point.high,
            low=point.low,
            close=point.price,
            volume=point.volume,
        )


@dataclass(slots=True)
class ChartResponse:
    """Parsed ``chart.result[0]`` entry for one symbol."""

    symbol: Symbol
    regular_market_price: Optional[float] = None
    market_state: Optional[str] = None
    trading_period: Optional[JSONLike] = None
    regular_market_volume: Optional[float] = None
    points: List[RawQuotePoint] = field(default_factory=list)

    @property
    def latest_volume(self) -> Optional[float]:
        """Return meta volume, else the last non-null point volume."""

        if self.regular_market_volume:
            return self.regular_market_volume
        for point in reversed(self.points):
            if point.volume is not None:
                return point.volume
        return None


def _is_array(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def zip_quote_arrays(timestamps: Any, quote: Any) -> List[RawQuotePoint]:
    """Zip ``timestamp`` with the OHLCV arrays of ``indicators.quote[0]``.

    A missing OHLCV array is read as all-null values. A non-array value or a
    length mismatch against ``timestamp`` raises :class:`InvalidInputShape`.
    """

    if not _is_array(timestamps):
        raise InvalidInputShape("`timestamp` must be an array of epoch seconds")
    if not isinstance(quote, Mapping):
        raise InvalidInputShape("`indicators.quote[0]` must be an object")
    size = len(timestamps)
    columns: dict[str, Sequence[Any]] = {}
    for name in QUOTE_FIELDS:
        values = quote.get(name)
        if values is None:
            columns[name] = [None] * size
            continue
        if not _is_array(values):
            raise InvalidInputShape(f"`{name}` must be an array")
        if len(values) != size:
            raise InvalidInputShape(
                f"`{name}` has {len(values)} entries but `timestamp` has {size}"
            )
        columns[name] = values
    return [
        RawQuotePoint(
            timestamp=timestamps[idx],
            open=columns["open"][idx],
            high=columns["high"][idx],
            low=columns["low"][idx],
            close=columns["close"][idx],
            volume=columns["volume"][idx],
        )
        for idx in range(size)
    ]


def parse_chart_result(symbol: Symbol, result: Any) -> ChartResponse:
    """Convert one ``chart.result`` entry into a :class:`ChartResponse`.

    A result carrying a price but no ``timestamp``/``indicators.quote`` yields
    an empty point list, matching what the provider sends for fresh listings.
    """

    if not isinstance(result, Mapping):
        raise InvalidInputShape("chart result must be an object")
    meta = result.get("meta") or {}
    if not isinstance(meta, Mapping):
        raise InvalidInputShape("`meta` must be an object")
    trading_period = meta.get("currentTradingPeriod")
    response = ChartResponse(
        symbol=Symbol(str(meta.get("symbol") or symbol).upper()),
        regular_market_price=meta.get("regularMarketPrice"),
        market_state=meta.get("regularMarketState") or meta.get("marketState"),
        trading_period=trading_period if isinstance(trading_period, Mapping) else None,
        regular_market_volume=meta.get("regularMarketVolume"),
    )
    timestamps = result.get("timestamp")
    indicators = result.get("indicators")
    if timestamps is None or not isinstance(indicators, Mapping):
        return response
    quotes = indicators.get("quote")
    if not quotes:
        return response
    if not _is_array(quotes):
        raise InvalidInputShape("`indicators.quote` must be an array")
    response.points = zip_quote_arrays(timestamps, quotes[0])
    return response


__all__ = [
    "QUOTE_FIELDS",
    "ChartResponse",
    "RawQuotePoint",
    "parse_chart_result",
    "zip_quote_arrays",
]
