from __future__ import annotations

import logging
import os
import signal
import sys
import time
from pathlib import Path
from typing import Dict, Mapping

from pydantic import ValidationError

from stockdash.config.loader import load_dashboard_config
from stockdash.config.models import DashboardConfig
from stockdash.core.errors import ConfigurationError
from stockdash.core.types import Symbol
from stockdash.data_feed.base import QuoteSource
from stockdash.data_feed.fixtures import FixtureQuoteSource
from stockdash.data_feed.yahoo_client import YahooChartClient
from stockdash.market.chart_service import ChartService, ChartSnapshot
from stockdash.telemetry import configure_logging

DEMO_BASE_PRICES: Mapping[str, float] = {
    "AAPL": 150.25,
    "MSFT": 300.15,
    "NVDA": 400.80,
    "SPY": 450.00,
    "QQQ": 380.00,
}


def main() -> None:
    project_root = Path(__file__).resolve().parents[1]
    config = _load_config(_resolve_config_path(project_root / "config"))

    log_dir = (project_root / config.telemetry.log_dir).resolve()
    logger = configure_logging(log_dir=log_dir, level=config.telemetry.log_level)
    logger.info(
        "Bootstrapping dashboard refresh",
        extra={"symbols": config.symbols, "period": config.default_period.value},
    )

    source = _build_source(config)
    service = ChartService(source, config.indicators, logger.getChild("charts"))

    stop_event = False

    def _request_stop(signum: int, _: object) -> None:
        nonlocal stop_event
        logger.info("Received signal", extra={"signal": signum})
        stop_event = True

    signal.signal(signal.SIGINT, _request_stop)
    signal.signal(signal.SIGTERM, _request_stop)

    update_interval = config.refresh_interval_sec
    try:
        while not stop_event:
            loop_start = time.perf_counter()
            run_once(service, config, logger)
            loop_duration = time.perf_counter() - loop_start
            time.sleep(max(0.0, update_interval - loop_duration))
    except KeyboardInterrupt:  # pragma: no cover - manual exit
        logger.info("Interrupted by user")
    finally:
        source.close()
        logger.info("Shutdown complete")


def run_once(service: ChartService, config: DashboardConfig, logger: logging.Logger) -> Dict[Symbol, ChartSnapshot]:
    """Refresh every configured symbol once and log a summary per chart."""

    snapshots = service.refresh(config.symbols, config.default_period)
    for snapshot in snapshots.values():
        _log_snapshot(snapshot, logger)
    missing = [symbol for symbol in config.symbols if Symbol(symbol) not in snapshots]
    if missing:
        logger.warning("Symbols skipped this cycle", extra={"missing": missing})
    return snapshots


def _log_snapshot(snapshot: ChartSnapshot, logger: logging.Logger) -> None:
    last = snapshot.points[-1] if snapshot.points else None
    logger.info(
        "Chart refreshed",
        extra={
            "symbol": snapshot.symbol,
            "price": snapshot.price,
            "points": len(snapshot.points),
            "market_state": snapshot.status.market_state,
            "market": snapshot.status.label,
            "last_close": last.price if last else None,
            "sma_short": last.sma50 if last else None,
            "bb_upper": last.bb_upper if last else None,
            "bb_lower": last.bb_lower if last else None,
            "latency_ms": round(snapshot.latency_ms, 2),
        },
    )


def _resolve_config_path(config_dir: Path) -> Path:
    env_path = os.environ.get("STOCKDASH_CONFIG_PATH")
    if env_path:
        return Path(env_path)
    candidate = config_dir / "dashboard.yml"
    if candidate.exists():
        return candidate
    fallback = config_dir / "dashboard.example.yml"
    print(f"[bootstrap] dashboard.yml not found, using {fallback}")
    return fallback


def _load_config(path: Path) -> DashboardConfig:
    try:
        return load_dashboard_config(path)
    except (FileNotFoundError, ValueError, TypeError, ValidationError) as exc:
        raise ConfigurationError(f"Invalid dashboard config {path}: {exc}") from exc


def _build_source(config: DashboardConfig) -> QuoteSource:
    if os.environ.get("STOCKDASH_QUOTE_SOURCE", "").lower() == "fixture":
        prices = {symbol: DEMO_BASE_PRICES.get(symbol, 100.0) for symbol in config.symbols}
        return FixtureQuoteSource.demo(prices, days=config.default_period.max_points + 1)
    return YahooChartClient(config.quote_source)


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - top-level safety
        print(f"Fatal error: {exc}", file=sys.stderr)
        raise
