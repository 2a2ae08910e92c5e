"""Typed configuration models for the dashboard data core.

The config subsystem relies on pydantic to validate the YAML file and to
provide strongly-typed objects to the rest of the runtime. Indicator periods
are validated here so the indicator engine itself stays total over any input.
"""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

from stockdash.core.enums import TimePeriod

DEFAULT_USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0 Safari/537.36"


class IndicatorConfig(BaseModel):
    """Overlay parameters for the chart (Bollinger, two SMAs, volume SMA).

    Defaults match the dashboard's chart settings: BB(20, 2), SMA 50/200 and a
    20-day volume average. A changed config means a full recomputation.
    """

    bb_period: PositiveInt = 20
    bb_std_dev_multiplier: float = Field(2.0, gt=0)
    sma_short_period: PositiveInt = 50
    sma_long_period: PositiveInt = 200
    volume_sma_period: PositiveInt = 20

    model_config = ConfigDict(frozen=True)


class QuoteSourceConfig(BaseModel):
    """HTTP settings for the Yahoo Finance chart endpoint."""

    base_url: str = Field("https://query1.finance.yahoo.com", min_length=8)
    timeout_sec: float = Field(10.0, gt=0)
    max_retries: PositiveInt = 3
    backoff_base_sec: float = Field(0.25, ge=0)
    user_agent: str = DEFAULT_USER_AGENT


class TelemetryConfig(BaseModel):
    """Logging switches for the refresh runner."""

    log_level: str = Field("INFO")
    log_dir: str = Field("data/logs")


class DashboardConfig(BaseModel):
    """Top-level config: watchlist, refresh cadence and sub-configs."""

    symbols: List[str] = Field(..., min_length=1)
    default_period: TimePeriod = TimePeriod.ONE_MONTH
    refresh_interval_sec: PositiveInt = 60
    indicators: IndicatorConfig = Field(default_factory=IndicatorConfig)
    quote_source: QuoteSourceConfig = Field(default_factory=QuoteSourceConfig)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)

    @field_validator("symbols")
    @classmethod
    def _normalize_symbols(cls, value: List[str]) -> List[str]:
        """Upper-case tickers and drop blanks/duplicates, keeping order."""

        seen: list[str] = []
        for raw in value:
            symbol = raw.strip().upper()
            if symbol and symbol not in seen:
                seen.append(symbol)
        if not seen:
            raise ValueError("symbols must contain at least one ticker")
        return seen

    @field_validator("default_period", mode="before")
    @classmethod
    def _parse_period(cls, value: object) -> object:
        if isinstance(value, str):
            return TimePeriod.from_value(value)
        return value
