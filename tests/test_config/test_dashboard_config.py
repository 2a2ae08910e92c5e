from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest
from pydantic import ValidationError

from stockdash.config.loader import load_dashboard_config, load_indicator_config
from stockdash.config.models import DashboardConfig, IndicatorConfig
from stockdash.core.enums import TimePeriod


def _write_yaml(path: Path, content: str) -> Path:
    path.write_text(dedent(content), encoding="utf-8")
    return path


def test_load_dashboard_config_should_parse_valid_yaml(tmp_path: Path) -> None:
    path = _write_yaml(
        tmp_path / "dashboard.yml",
        """
        symbols: [aapl, " msft ", AAPL]
        default_period: 6mo
        refresh_interval_sec: 30
        indicators:
          bb_period: 10
          bb_std_dev_multiplier: 1.5
        quote_source:
          max_retries: 5
        telemetry:
          log_level: DEBUG
        """,
    )
    config = load_dashboard_config(path)
    assert config.symbols == ["AAPL", "MSFT"]
    assert config.default_period is TimePeriod.SIX_MONTHS
    assert config.refresh_interval_sec == 30
    assert config.indicators.bb_period == 10
    assert config.indicators.sma_long_period == 200
    assert config.quote_source.max_retries == 5
    assert config.quote_source.base_url.startswith("https://")
    assert config.telemetry.log_level == "DEBUG"


def test_load_dashboard_config_should_accept_provider_range_alias(tmp_path: Path) -> None:
    path = _write_yaml(tmp_path / "dashboard.yml", "symbols: [SPY]\ndefault_period: 1mo\n")
    assert load_dashboard_config(path).default_period is TimePeriod.ONE_MONTH


def test_load_dashboard_config_should_require_symbols(tmp_path: Path) -> None:
    path = _write_yaml(tmp_path / "dashboard.yml", "{}")
    with pytest.raises(ValidationError):
        load_dashboard_config(path)


def test_load_dashboard_config_should_fail_on_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_dashboard_config(tmp_path / "absent.yml")


def test_load_dashboard_config_should_reject_non_mapping_root(tmp_path: Path) -> None:
    path = _write_yaml(tmp_path / "dashboard.yml", "- AAPL\n- MSFT\n")
    with pytest.raises(ValueError):
        load_dashboard_config(path)


def test_load_indicator_config_should_default_missing_section(tmp_path: Path) -> None:
    path = _write_yaml(tmp_path / "dashboard.yml", "symbols: [SPY]\n")
    assert load_indicator_config(path) == IndicatorConfig()


def test_indicator_config_should_validate_periods() -> None:
    with pytest.raises(ValidationError):
        IndicatorConfig(bb_period=0)
    with pytest.raises(ValidationError):
        IndicatorConfig(bb_std_dev_multiplier=-1)


def test_dashboard_config_should_reject_blank_symbols() -> None:
    with pytest.raises(ValidationError):
        DashboardConfig(symbols=["  "])
    with pytest.raises(ValidationError):
        DashboardConfig(symbols=["SPY"], default_period="5y")
