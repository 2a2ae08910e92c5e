from __future__ import annotations

import logging

import pytest

from stockdash.core.enums import TimePeriod
from stockdash.core.errors import InvalidInputShape, SymbolNotFoundError
from stockdash.data_feed.fixtures import FixtureQuoteSource, build_fixture_result
from stockdash.market.chart_service import ChartService


def test_load_should_build_snapshot_with_overlays(fixture_source, small_indicator_config) -> None:
    service = ChartService(fixture_source, small_indicator_config)
    snapshot = service.load("aapl", TimePeriod.ONE_MONTH)

    assert snapshot.symbol == "AAPL"
    assert snapshot.price == 14.0
    assert [point.price for point in snapshot.points] == [10.0, 11.0, 12.0, 13.0, 14.0]
    assert snapshot.points[-1].sma50 == 13.5
    assert snapshot.points[-1].bb_mid == 13.0
    assert snapshot.status.is_market_open is True
    assert snapshot.latest_volume == 5_000.0
    assert snapshot.latency_ms == 12.5
    assert snapshot.is_empty is False


def test_load_should_truncate_to_period_window(close_rows, small_indicator_config) -> None:
    closes = [float(100 + idx) for idx in range(40)]
    source = FixtureQuoteSource({"SPY": build_fixture_result("SPY", close_rows(closes))})
    snapshot = ChartService(source, small_indicator_config).load("SPY", TimePeriod.ONE_MONTH)
    assert len(snapshot.points) == 30
    assert snapshot.points[0].price == 110.0
    assert snapshot.points[0].sma50 is None


def test_load_should_flag_empty_series(close_rows, caplog) -> None:
    source = FixtureQuoteSource({"GAP": build_fixture_result("GAP", close_rows([None, 0.0]), price=5.0)})
    service = ChartService(source)
    with caplog.at_level(logging.INFO):
        snapshot = service.load("GAP")
    assert snapshot.is_empty is True
    assert snapshot.points == []
    assert snapshot.status.market_state == "UNKNOWN"
    assert "Empty series" in caplog.text


def test_load_should_propagate_shape_errors() -> None:
    broken = {"timestamp": [1, 2], "indicators": {"quote": [{"close": [1.0]}]}}
    service = ChartService(FixtureQuoteSource({"BAD": broken}))
    with pytest.raises(InvalidInputShape):
        service.load("BAD")


def test_load_should_propagate_unknown_symbol(fixture_source) -> None:
    with pytest.raises(SymbolNotFoundError):
        ChartService(fixture_source).load("TSLA")


def test_refresh_should_skip_failed_symbols(fixture_source, caplog) -> None:
    service = ChartService(fixture_source)
    with caplog.at_level(logging.WARNING):
        snapshots = service.refresh(["AAPL", "TSLA", "MSFT"], TimePeriod.THREE_MONTHS)
    assert list(snapshots) == ["AAPL", "MSFT"]
    assert snapshots["MSFT"].status.is_market_open is False
    assert "TSLA" in caplog.text
    assert [call[1] for call in fixture_source.calls] == [TimePeriod.THREE_MONTHS] * 3


def test_snapshot_to_dict_should_expose_chart_data(fixture_source, small_indicator_config) -> None:
    payload = ChartService(fixture_source, small_indicator_config).load("MSFT").to_dict()
    assert payload["symbol"] == "MSFT"
    assert payload["period"] == "1M"
    assert len(payload["chartData"]) == 3
    assert payload["chartData"][-1]["sma50"] == 301.5
    assert payload["marketStatus"]["marketState"] == "CLOSED"
