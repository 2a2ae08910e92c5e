"""Configuration loading and validation package."""

from .loader import load_dashboard_config, load_indicator_config
from .models import DashboardConfig, IndicatorConfig, QuoteSourceConfig, TelemetryConfig

__all__ = [
    "DashboardConfig",
    "IndicatorConfig",
    "QuoteSourceConfig",
    "TelemetryConfig",
    "load_dashboard_config",
    "load_indicator_config",
]
