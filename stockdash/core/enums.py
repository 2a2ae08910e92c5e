"""Enumerations shared across dashboard subsystems."""
from __future__ import annotations

from enum import Enum


class MarketSessionState(str, Enum):
    """Market state tokens reported by the quote provider."""

    REGULAR = "REGULAR"
    PRE = "PRE"
    POST = "POST"
    CLOSED = "CLOSED"
    UNKNOWN = "UNKNOWN"


class TimePeriod(str, Enum):
    """History windows offered by the dashboard period selector."""

    ONE_MONTH = "1M"
    THREE_MONTHS = "3mo"
    SIX_MONTHS = "6mo"
    ONE_YEAR = "1y"

    @property
    def range_param(self) -> str:
        """Return the provider ``range`` query value for this period."""

        if self is TimePeriod.ONE_MONTH:
            return "1mo"
        return self.value

    @property
    def max_points(self) -> int:
        """Return how many daily points the chart keeps for this period."""

        return _MAX_POINTS[self]

    @classmethod
    def from_value(cls, value: str) -> "TimePeriod":
        """Map raw period strings (``1M``, ``1mo``, ``3mo``...) to members."""

        for member in cls:
            if value in (member.value, member.range_param):
                return member
        raise ValueError(f"Unsupported time period: {value}")


_MAX_POINTS = {
    TimePeriod.ONE_MONTH: 30,
    TimePeriod.THREE_MONTHS: 90,
    TimePeriod.SIX_MONTHS: 180,
    TimePeriod.ONE_YEAR: 365,
}
