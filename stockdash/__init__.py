"""Top-level package for the stock dashboard data core.

This package exposes the subsystems (config, core, data_feed, market,
telemetry) behind the price-history dashboard. Each subpackage should remain
import-safe for any runtime component; only ``data_feed`` performs network I/O.
"""

__all__: list[str] = []
