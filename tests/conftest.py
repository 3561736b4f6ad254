"""Shared fixtures for portfolio tests."""

import threading
from typing import Dict, Iterable, Optional

import pytest

from portfolio_tracker.core.errors import QuoteError
from portfolio_tracker.core.portfolio.store import HoldingStore
from portfolio_tracker.data.market.base import QuoteSource


class FakeQuoteSource(QuoteSource):
    """Quote source with canned prices.

    Symbols missing from ``prices`` fail with QuoteError. Symbols listed in
    ``blocked`` wait on ``release`` before answering.
    """

    def __init__(self, prices: Optional[Dict[str, float]] = None, blocked: Iterable[str] = ()):
        self.prices = dict(prices or {})
        self.blocked = set(blocked)
        self.release = threading.Event()
        self.calls = []
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return "fake"

    def fetch_price(self, symbol: str) -> float:
        with self._lock:
            self.calls.append(symbol)
        if symbol in self.blocked:
            self.release.wait(timeout=5)
        if symbol not in self.prices:
            raise QuoteError(symbol, "unknown symbol")
        return self.prices[symbol]


@pytest.fixture
def quotes():
    source = FakeQuoteSource()
    yield source
    source.release.set()


@pytest.fixture
def store():
    return HoldingStore()
