"""Quote source abstraction."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone

from .models import Price


class QuoteSource(ABC):
    """Abstract base class for quote sources.

    A quote source maps a ticker symbol to its current price. Every kind of
    failure (network, unknown symbol, malformed upstream response, timeout)
    is reported the same way, as a ``QuoteError``.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the quote source identifier."""
        pass

    @abstractmethod
    def fetch_price(self, symbol: str) -> float:
        """Fetch the current price for a symbol.

        Args:
            symbol: Stock ticker symbol

        Returns:
            Current price (positive)

        Raises:
            QuoteError: If the price could not be fetched
        """
        pass

    def get_quote(self, symbol: str) -> Price:
        """Fetch the current price wrapped with its source and timestamp."""
        symbol = symbol.strip().upper()
        price = self.fetch_price(symbol)
        return Price(
            symbol=symbol,
            price=price,
            source=self.name,
            fetched_at=datetime.now(timezone.utc),
        )
