from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, List, Optional

import pytest

from stockdash.config.models import IndicatorConfig
from stockdash.data_feed.fixtures import DAY_SECONDS, FixtureQuoteSource, OhlcvRow, build_fixture_result
from stockdash.data_feed.quotes import RawQuotePoint

BASE_TIMESTAMP = int(datetime(2024, 1, 2, 14, 30, tzinfo=timezone.utc).timestamp())


@pytest.fixture
def raw_point_factory() -> Callable[..., RawQuotePoint]:
    def _factory(day: int = 0, close: Optional[float] = 100.0, **fields: Optional[float]) -> RawQuotePoint:
        return RawQuotePoint(timestamp=BASE_TIMESTAMP + day * DAY_SECONDS, close=close, **fields)

    return _factory


@pytest.fixture
def close_rows() -> Callable[..., List[OhlcvRow]]:
    def _rows(closes: List[Optional[float]], volume: float = 1_000.0) -> List[OhlcvRow]:
        return [
            OhlcvRow(
                timestamp=BASE_TIMESTAMP + idx * DAY_SECONDS,
                open=close,
                high=close,
                low=close,
                close=close,
                volume=volume,
            )
            for idx, close in enumerate(closes)
        ]

    return _rows


@pytest.fixture
def small_indicator_config() -> IndicatorConfig:
    return IndicatorConfig(
        bb_period=3,
        bb_std_dev_multiplier=2.0,
        sma_short_period=2,
        sma_long_period=4,
        volume_sma_period=2,
    )


@pytest.fixture
def fixture_source(close_rows) -> FixtureQuoteSource:
    return FixtureQuoteSource(
        {
            "AAPL": build_fixture_result(
                "AAPL",
                close_rows([10.0, 11.0, None, 12.0, 13.0, 14.0]),
                market_state="REGULAR",
                regular_market_volume=5_000.0,
            ),
            "msft": build_fixture_result(
                "MSFT",
                close_rows([300.0, 301.0, 302.0]),
                market_state="CLOSED",
            ),
        },
        latency_ms=12.5,
    )
