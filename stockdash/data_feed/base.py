"""Quote source contract shared by the HTTP client and the fixture source."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

from stockdash.core.enums import TimePeriod
from stockdash.core.types import Symbol

from .quotes import ChartResponse

T = TypeVar("T")


@dataclass(slots=True)
class DataWithLatency(Generic[T]):
    """Container used by fetch helpers to propagate measured latency."""

    data: T
    latency_ms: float


class QuoteSource(Protocol):
    """Minimal interface abstracting the upstream quote provider."""

    def fetch_chart(self, symbol: Symbol, period: TimePeriod) -> DataWithLatency[ChartResponse]: ...

    def close(self) -> None: ...


__all__ = ["DataWithLatency", "QuoteSource"]
