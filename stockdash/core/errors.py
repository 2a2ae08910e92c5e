"""Error hierarchy shared by the dashboard subsystems.

Callers distinguish between bad configuration, malformed provider payloads and
transport failures. ``InvalidInputShape`` and ``SymbolNotFoundError`` are what
the presentation layer turns into "failed to fetch data" / "symbol not found".
An empty series after normalization is not an error.
"""
from __future__ import annotations


class CoreError(Exception):
    """Base class for all custom exceptions in the application."""


class ConfigurationError(CoreError):
    """Raised when configuration files are missing or invalid."""


class MarketDataError(CoreError):
    """Raised for failures while fetching or parsing market data."""


class InvalidInputShape(MarketDataError):
    """Raised when raw provider arrays cannot be read as a point sequence."""


class SymbolNotFoundError(MarketDataError):
    """Raised when the quote source has no chart result for a symbol."""

    def __init__(self, symbol: str, message: str | None = None):
        super().__init__(message or f"Symbol not found: {symbol}")
        self.symbol = symbol


class QuoteSourceError(MarketDataError):
    """Raised when the quote source keeps failing after all retries."""
