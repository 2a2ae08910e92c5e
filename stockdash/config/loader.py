"""YAML loader for the config subsystem.

The dashboard keeps a single ``dashboard.yml`` holding the watchlist, the
refresh cadence, indicator periods, quote-source HTTP settings and telemetry.
The file is validated via models.py and returned as a typed object.
"""
from __future__ import annotations

from pathlib import Path
from typing import Mapping

import yaml

from .models import DashboardConfig, IndicatorConfig

_DEFAULT_CONFIG_DIR = Path("config")


def _read_yaml(path: Path) -> Mapping:
    """Read a YAML file and return a mapping (empty dict if file is blank)."""

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open("r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp) or {}
    if not isinstance(data, Mapping):
        raise ValueError(f"YAML root must be a mapping in {path}")
    return data


def load_dashboard_config(path: Path | str = _DEFAULT_CONFIG_DIR / "dashboard.yml") -> DashboardConfig:
    """Load dashboard.yml (symbols, default_period, indicators, quote_source).

    Sections other than ``symbols`` are optional and fall back to the model
    defaults, so a minimal file only lists the watchlist.
    """

    data = _read_yaml(Path(path))
    return DashboardConfig.model_validate(data)


def load_indicator_config(path: Path | str) -> IndicatorConfig:
    """Load only the ``indicators`` section, e.g. for chart settings overrides."""

    data = _read_yaml(Path(path))
    section = data.get("indicators", {})
    if not isinstance(section, Mapping):
        raise TypeError("`indicators` must be a mapping")
    return IndicatorConfig.model_validate(section)
