from __future__ import annotations

import pytest

from stockdash.core.errors import InvalidInputShape
from stockdash.core.types import Symbol
from stockdash.data_feed.quotes import RawQuotePoint, parse_chart_result, zip_quote_arrays


def test_zip_quote_arrays_should_pair_values_by_index() -> None:
    quote = {
        "open": [1.0, 2.0],
        "high": [1.5, 2.5],
        "low": [0.5, 1.5],
        "close": [1.2, None],
        "volume": [10, 20],
    }
    points = zip_quote_arrays([100, 200], quote)
    assert points == [
        RawQuotePoint(timestamp=100, open=1.0, high=1.5, low=0.5, close=1.2, volume=10),
        RawQuotePoint(timestamp=200, open=2.0, high=2.5, low=1.5, close=None, volume=20),
    ]


def test_zip_quote_arrays_should_treat_missing_array_as_gaps() -> None:
    points = zip_quote_arrays([100, 200], {"close": [1.0, 2.0]})
    assert [point.volume for point in points] == [None, None]
    assert [point.open for point in points] == [None, None]


@pytest.mark.parametrize(
    "timestamps, quote",
    [
        ([100, 200, 300], {"close": [1.0, 2.0]}),
        ([100, 200], {"close": [1.0, 2.0], "volume": [1]}),
        ([100], {"close": "1.0"}),
        ("100", {"close": [1.0]}),
        ([100], [1.0]),
    ],
)
def test_zip_quote_arrays_should_reject_bad_shapes(timestamps, quote) -> None:
    with pytest.raises(InvalidInputShape):
        zip_quote_arrays(timestamps, quote)


def test_parse_chart_result_should_read_meta_and_points() -> None:
    result = {
        "meta": {
            "symbol": "aapl",
            "regularMarketPrice": 190.5,
            "regularMarketState": "POST",
            "regularMarketVolume": 0,
            "currentTradingPeriod": {"regular": {"start": 1, "end": 2}},
        },
        "timestamp": [100, 200],
        "indicators": {"quote": [{"close": [1.0, 2.0], "volume": [5, None]}]},
    }
    response = parse_chart_result(Symbol("AAPL"), result)
    assert response.symbol == "AAPL"
    assert response.regular_market_price == 190.5
    assert response.market_state == "POST"
    assert response.trading_period == {"regular": {"start": 1, "end": 2}}
    assert len(response.points) == 2
    assert response.latest_volume == 5


def test_parse_chart_result_without_history_should_yield_no_points() -> None:
    response = parse_chart_result(Symbol("NEW"), {"meta": {"regularMarketPrice": 10.0}})
    assert response.points == []
    assert response.regular_market_price == 10.0
    assert response.latest_volume is None


def test_parse_chart_result_should_reject_non_mapping() -> None:
    with pytest.raises(InvalidInputShape):
        parse_chart_result(Symbol("AAPL"), ["not", "a", "result"])
