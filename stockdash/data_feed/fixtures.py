"""In-memory quote source used by tests and offline demos.

Instead of baking demo tables into the pipeline, fixture payloads are shaped
exactly like the provider's ``chart.result[0]`` entry and served through the
same :class:`~stockdash.data_feed.base.QuoteSource` contract as the HTTP
client, so everything downstream runs unchanged.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from stockdash.core.enums import TimePeriod
from stockdash.core.errors import SymbolNotFoundError
from stockdash.core.types import JSONLike, Symbol

from .base import DataWithLatency
from .quotes import QUOTE_FIELDS, ChartResponse, parse_chart_result

DAY_SECONDS = 24 * 60 * 60


@dataclass(slots=True)
class OhlcvRow:
    """Fixture row; ``None`` marks a provider gap."""

    timestamp: int
    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    close: Optional[float] = None
    volume: Optional[float] = None


def build_fixture_result(
    symbol: str,
    rows: Iterable[OhlcvRow],
    *,
    price: Optional[float] = None,
    market_state: Optional[str] = None,
    trading_period: Optional[JSONLike] = None,
    regular_market_volume: Optional[float] = None,
) -> Dict[str, Any]:
    """Build a provider-shaped ``chart.result[0]`` mapping from rows."""

    rows = list(rows)
    meta: Dict[str, Any] = {"symbol": symbol.upper()}
    if price is None and rows:
        price = rows[-1].close
    if price is not None:
        meta["regularMarketPrice"] = price
    if market_state is not None:
        meta["regularMarketState"] = market_state
    if trading_period is not None:
        meta["currentTradingPeriod"] = dict(trading_period)
    if regular_market_volume is not None:
        meta["regularMarketVolume"] = regular_market_volume
    quote = {name: [getattr(row, name) for row in rows] for name in QUOTE_FIELDS}
    return {
        "meta": meta,
        "timestamp": [row.timestamp for row in rows],
        "indicators": {"quote": [quote]},
    }


def generate_demo_series(
    base_price: float,
    *,
    days: int = 31,
    seed: int = 7,
    end: Optional[datetime] = None,
) -> List[OhlcvRow]:
    """Return ``days`` deterministic daily rows wandering around ``base_price``.

    Closes vary within ±2.5% of the base, opens within ±1% of the close and
    volumes between one and eleven million, like the dashboard demo data.
    """

    rng = random.Random(seed)
    last_day = (end or datetime.now(timezone.utc)).replace(hour=0, minute=0, second=0, microsecond=0)
    rows: List[OhlcvRow] = []
    for offset in range(days - 1, -1, -1):
        day = last_day - timedelta(days=offset)
        close = base_price * (1 + (rng.random() - 0.5) * 0.05)
        rows.append(
            OhlcvRow(
                timestamp=int(day.timestamp()),
                open=close * (1 + (rng.random() - 0.5) * 0.02),
                high=close * (1 + rng.random() * 0.03),
                low=close * (1 - rng.random() * 0.03),
                close=close,
                volume=float(rng.randrange(1_000_000, 11_000_000)),
            )
        )
    return rows


@dataclass(slots=True)
class FixtureQuoteSource:
    """Serve pre-built chart results keyed by symbol (case-insensitive)."""

    payloads: Mapping[str, JSONLike]
    latency_ms: float = 0.0
    calls: List[tuple[Symbol, TimePeriod]] = field(default_factory=list)
    closed: bool = False
    _by_symbol: Dict[str, JSONLike] = field(init=False, default_factory=dict)

    def __post_init__(self) -> None:
        self._by_symbol = {key.upper(): value for key, value in self.payloads.items()}

    @classmethod
    def demo(cls, prices: Mapping[str, float], *, days: int = 31, seed: int = 7) -> "FixtureQuoteSource":
        """Build a source with generated series for each ``symbol: base_price``."""

        payloads = {
            symbol: build_fixture_result(
                symbol,
                generate_demo_series(price, days=days, seed=seed + idx),
                market_state="CLOSED",
            )
            for idx, (symbol, price) in enumerate(prices.items())
        }
        return cls(payloads)

    def fetch_chart(self, symbol: Symbol, period: TimePeriod) -> DataWithLatency[ChartResponse]:
        ticker = str(symbol).strip().upper()
        self.calls.append((Symbol(ticker), period))
        result = self._by_symbol.get(ticker)
        if result is None:
            raise SymbolNotFoundError(ticker)
        return DataWithLatency(parse_chart_result(Symbol(ticker), result), self.latency_ms)

    def close(self) -> None:
        self.closed = True

    def symbols(self) -> Sequence[str]:
        return sorted(self._by_symbol)


__all__ = [
    "DAY_SECONDS",
    "FixtureQuoteSource",
    "OhlcvRow",
    "build_fixture_result",
    "generate_demo_series",
]
