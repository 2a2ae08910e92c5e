"""Chart overlays: simple moving averages, Bollinger Bands and volume SMA.

Every rolling statistic slides a window accumulator (fold in the newest
value, drop the evicted one), so a full series costs O(n) regardless of the
period. Indices before the window is seated hold ``None``; a period longer
than the series produces an all-``None`` column rather than an error.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from stockdash.config.models import IndicatorConfig
from stockdash.core.types import NumericSequence, OptionalSeries

from .models import ChartPoint, IndicatorBundle, OverlayPoint

ChartInput = Union[ChartPoint, Mapping[str, Any]]


@dataclass(slots=True)
class BollingerBands:
    """Mid (SMA), upper and lower band columns aligned with the input."""

    mid: OptionalSeries
    upper: OptionalSeries
    lower: OptionalSeries


def compute_sma(series: NumericSequence, period: int) -> OptionalSeries:
    """Return the trailing ``period`` mean per index (``None`` until seated)."""

    if period < 1:
        return [None] * len(series)
    out: OptionalSeries = []
    window_sum = 0.0
    for idx, value in enumerate(series):
        window_sum += value
        if idx >= period:
            window_sum -= series[idx - period]
        out.append(window_sum / period if idx >= period - 1 else None)
    return out


def compute_rolling_stddev(series: NumericSequence, period: int, means: Sequence[Optional[float]]) -> OptionalSeries:
    """Population standard deviation over the trailing window around ``means``.

    The window keeps its own mean and sum of squared deviations (``m2``) with a
    Welford-style slide: one update replaces the evicted value with the newest,
    so no large running sums are subtracted. The spread around ``means[idx]``
    is ``m2 / p + (window_mean - means[idx]) ** 2``. A window whose values are
    all equal yields exactly ``0.0`` and rebases the accumulators.
    """

    if period < 1:
        return [None] * len(series)
    out: OptionalSeries = []
    window_mean = 0.0
    m2 = 0.0
    run = 0
    for idx, value in enumerate(series):
        run = run + 1 if idx and value == series[idx - 1] else 1
        if idx < period:
            delta = value - window_mean
            window_mean += delta / (idx + 1)
            m2 += delta * (value - window_mean)
        else:
            evicted = series[idx - period]
            previous_mean = window_mean
            window_mean += (value - evicted) / period
            m2 += (value - evicted) * (value - window_mean + evicted - previous_mean)
        flat = run >= period
        if flat:
            window_mean = float(value)
            m2 = 0.0
        mean = means[idx] if idx < len(means) else None
        if idx < period - 1 or mean is None:
            out.append(None)
        elif flat:
            out.append(0.0)
        else:
            offset = window_mean - mean
            out.append(math.sqrt(max(m2, 0.0) / period + offset * offset))
    return out


def compute_bollinger_bands(closes: NumericSequence, period: int, std_dev_multiplier: float) -> BollingerBands:
    """Return ``mid ± multiplier × stddev`` bands; ``None`` propagates."""

    mid = compute_sma(closes, period)
    deviation = compute_rolling_stddev(closes, period, mid)
    upper: OptionalSeries = []
    lower: OptionalSeries = []
    for m, sd in zip(mid, deviation):
        if m is None or sd is None:
            upper.append(None)
            lower.append(None)
        else:
            upper.append(m + std_dev_multiplier * sd)
            lower.append(m - std_dev_multiplier * sd)
    return BollingerBands(mid=mid, upper=upper, lower=lower)


def _field(point: ChartInput, name: str) -> Any:
    if isinstance(point, Mapping):
        return point.get(name)
    return getattr(point, name, None)


def closing_price(point: ChartInput) -> float:
    """Return ``close`` if present, else ``price``, else ``0``."""

    value = _field(point, "close")
    if value is None:
        value = _field(point, "price")
    return float(value or 0)


def point_volume(point: ChartInput) -> float:
    return float(_field(point, "volume") or 0)


def _merge(point: ChartInput, bundle: IndicatorBundle) -> Union[OverlayPoint, Dict[str, Any]]:
    if isinstance(point, ChartPoint):
        return OverlayPoint.merge(point, bundle)
    merged = dict(point)
    merged.update(bundle.to_dict())
    return merged


def compute_chart_overlays(
    points: Sequence[ChartInput],
    config: IndicatorConfig,
) -> List[Union[OverlayPoint, Dict[str, Any]]]:
    """Attach volume SMA, SMA short/long and Bollinger Bands to every point.

    ``points`` is left untouched; chart points come back as
    :class:`OverlayPoint` objects, plain mappings as new dicts carrying the
    presentation keys (``volSMA``, ``sma50``, ``sma200``, ``bbMid``...).
    """

    closes = [closing_price(point) for point in points]
    volumes = [point_volume(point) for point in points]

    vol_sma = compute_sma(volumes, config.volume_sma_period)
    sma_short = compute_sma(closes, config.sma_short_period)
    sma_long = compute_sma(closes, config.sma_long_period)
    bands = compute_bollinger_bands(closes, config.bb_period, config.bb_std_dev_multiplier)

    merged: List[Union[OverlayPoint, Dict[str, Any]]] = []
    for idx, point in enumerate(points):
        bundle = IndicatorBundle(
            vol_sma=vol_sma[idx],
            sma50=sma_short[idx],
            sma200=sma_long[idx],
            bb_mid=bands.mid[idx],
            bb_upper=bands.upper[idx],
            bb_lower=bands.lower[idx],
        )
        merged.append(_merge(point, bundle))
    return merged


__all__ = [
    "BollingerBands",
    "closing_price",
    "compute_bollinger_bands",
    "compute_chart_overlays",
    "compute_rolling_stddev",
    "compute_sma",
    "point_volume",
]
