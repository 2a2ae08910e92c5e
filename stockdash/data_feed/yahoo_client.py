"""Yahoo Finance chart client (production quote source).

Wraps ``GET /v8/finance/chart/{symbol}`` with ``interval=1d`` and the range
mapped from the dashboard period (``1M`` → ``1mo``). The response carries the
latest quote metadata (``regularMarketPrice``, ``regularMarketState``,
``currentTradingPeriod``) next to the parallel OHLCV arrays parsed in
:mod:`stockdash.data_feed.quotes`.

Latency is recorded for every call as ``(response_time - request_time)`` in
milliseconds so the refresh runner can log slow upstream responses.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Mapping, Optional

import httpx

from stockdash.config.models import QuoteSourceConfig
from stockdash.core.enums import TimePeriod
from stockdash.core.errors import QuoteSourceError, SymbolNotFoundError
from stockdash.core.types import Symbol

from .base import DataWithLatency
from .quotes import ChartResponse, parse_chart_result

LOGGER = logging.getLogger(__name__)

CHART_PATH = "/v8/finance/chart/{symbol}"
_RETRYABLE_STATUS = frozenset({429, 500, 502, 503, 504})


class YahooChartClient:
    """Synchronous REST client for the Yahoo Finance chart endpoint.

    Parameters
    ----------
    config:
        :class:`stockdash.config.models.QuoteSourceConfig` with base URL,
        timeout and retry settings.
    session:
        Optional pre-configured :class:`httpx.Client` (e.g. with a
        ``MockTransport`` in tests).

    Notes
    -----
    * Retries use exponential backoff ``backoff_base * 2 ** attempt`` for
      transport errors and 429/5xx answers. Each failed attempt is logged as a
      warning; :class:`QuoteSourceError` is raised after the final attempt.
    * A 404 or an empty ``chart.result`` raises :class:`SymbolNotFoundError`
      straight away.
    """

    def __init__(self, config: QuoteSourceConfig, session: httpx.Client | None = None) -> None:
        self._config = config
        self._client = session or httpx.Client(
            base_url=config.base_url,
            timeout=config.timeout_sec,
            headers={"User-Agent": config.user_agent},
        )
        self._max_retries = config.max_retries
        self._backoff_base = config.backoff_base_sec

    def close(self) -> None:
        """Close the underlying HTTP client."""

        self._client.close()

    def __enter__(self) -> "YahooChartClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def fetch_chart(self, symbol: Symbol, period: TimePeriod) -> DataWithLatency[ChartResponse]:
        """Return the parsed chart for ``symbol`` over ``period`` (daily bars)."""

        ticker = str(symbol).strip().upper()
        params = {
            "range": period.range_param,
            "interval": "1d",
            "region": "US",
            "lang": "en-US",
        }
        payload, latency = self._request(ticker, params)
        result = self._first_result(ticker, payload)
        return DataWithLatency(parse_chart_result(Symbol(ticker), result), latency)

    def _request(self, ticker: str, params: Mapping[str, Any]) -> tuple[Mapping[str, Any], float]:
        """Perform the GET with retry/backoff and return ``(json, latency_ms)``."""

        path = CHART_PATH.format(symbol=ticker)
        last_error: Optional[Exception] = None
        for attempt in range(self._max_retries):
            start = time.perf_counter()
            try:
                response = self._client.get(path, params=params)
                latency_ms = (time.perf_counter() - start) * 1_000.0
                if response.status_code == 404:
                    raise SymbolNotFoundError(ticker)
                if response.status_code in _RETRYABLE_STATUS:
                    response.raise_for_status()
                if response.is_error:
                    raise QuoteSourceError(f"Chart request for {ticker} failed with HTTP {response.status_code}")
                payload = response.json()
                if not isinstance(payload, Mapping):
                    raise QuoteSourceError(f"Unexpected chart payload for {ticker}")
                return payload, latency_ms
            except (httpx.HTTPError, ValueError) as exc:
                last_error = exc
                LOGGER.warning(
                    "Chart fetch %s failed (attempt %s/%s): %s",
                    ticker,
                    attempt + 1,
                    self._max_retries,
                    exc,
                )
                if attempt + 1 < self._max_retries:
                    time.sleep(self._backoff_base * (2 ** attempt))
        raise QuoteSourceError(f"Chart request for {ticker} failed: {last_error}") from last_error

    @staticmethod
    def _first_result(ticker: str, payload: Mapping[str, Any]) -> Mapping[str, Any]:
        chart = payload.get("chart") or {}
        error = chart.get("error") if isinstance(chart, Mapping) else None
        results = chart.get("result") if isinstance(chart, Mapping) else None
        if not results:
            description = error.get("description") if isinstance(error, Mapping) else None
            raise SymbolNotFoundError(ticker, description)
        return results[0]


__all__ = ["CHART_PATH", "YahooChartClient"]
