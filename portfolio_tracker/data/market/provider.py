"""Quote source backed by yfinance."""

from __future__ import annotations

import logging
import math
import threading
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from typing import Optional

import yfinance as yf

from portfolio_tracker.core.errors import QuoteError
from .base import QuoteSource

logger = logging.getLogger(__name__)

# Timeout for yfinance API calls (seconds)
YFINANCE_TIMEOUT = 30

# Symbol format mappings for Yahoo Finance compatibility
# Maps user-friendly formats to Yahoo Finance formats
SYMBOL_MAPPINGS = {
    # Warrant formats: /WS -> -WT (Yahoo Finance warrant suffix)
    "/WS": "-WT",
    "/W": "-WT",
    ".WS": "-WT",
    ".W": "-WT",
}


def normalize_symbol(symbol: str) -> tuple[str, str]:
    """Normalize a symbol to Yahoo Finance format.

    Args:
        symbol: Original symbol (e.g., 'IONQ/WS')

    Returns:
        Tuple of (yahoo_symbol, original_symbol)
    """
    original = symbol.upper()
    yahoo_symbol = original

    for suffix, yahoo_suffix in SYMBOL_MAPPINGS.items():
        if original.endswith(suffix.upper()):
            base = original[: -len(suffix)]
            yahoo_symbol = base + yahoo_suffix
            logger.debug(f"Normalized symbol {original} -> {yahoo_symbol}")
            break

    return yahoo_symbol, original


class YFinanceQuoteSource(QuoteSource):
    """Yahoo Finance quotes with a per-call timeout."""

    # Shared executor for timeout handling (reused across calls)
    _executor: Optional[ThreadPoolExecutor] = None
    _executor_lock = threading.Lock()

    def __init__(self, timeout: int = YFINANCE_TIMEOUT):
        """Initialize provider.

        Args:
            timeout: Timeout for yfinance API calls in seconds.
        """
        self.timeout = timeout

    @property
    def name(self) -> str:
        return "yfinance"

    @classmethod
    def _get_executor(cls) -> ThreadPoolExecutor:
        """Get or create shared executor."""
        with cls._executor_lock:
            if cls._executor is None:
                cls._executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="yfinance")
            return cls._executor

    def _fetch_with_timeout(self, func, *args, **kwargs):
        """Execute a function with timeout protection.

        Returns:
            Function result or None on timeout
        """
        executor = self._get_executor()
        future = executor.submit(func, *args, **kwargs)
        try:
            return future.result(timeout=self.timeout)
        except FuturesTimeoutError:
            logger.warning(f"Timeout after {self.timeout}s fetching market data")
            return None

    def fetch_price(self, symbol: str) -> float:
        """Get current price for a symbol.

        Args:
            symbol: Stock ticker symbol (e.g., 'AAPL', 'IONQ/WS')

        Returns:
            Current price

        Raises:
            QuoteError: Timeout, no data, or yfinance failure
        """
        yahoo_symbol, original_symbol = normalize_symbol(symbol)

        def _fetch_price():
            ticker = yf.Ticker(yahoo_symbol)
            p = ticker.info.get("currentPrice") or ticker.info.get("regularMarketPrice")
            if p is None:
                hist = ticker.history(period="1d")
                if not hist.empty:
                    p = float(hist["Close"].iloc[-1])
            return p

        try:
            price = self._fetch_with_timeout(_fetch_price)
        except Exception as e:
            logger.error(f"yfinance error for {original_symbol}: {e}")
            raise QuoteError(original_symbol, str(e)) from e

        if price is None:
            # Timeout or no data
            logger.warning(f"Could not fetch price for {original_symbol} (Yahoo: {yahoo_symbol})")
            raise QuoteError(original_symbol, "no price data")

        try:
            price = float(price)
        except (TypeError, ValueError):
            raise QuoteError(original_symbol, f"invalid price data {price!r}")
        if not math.isfinite(price) or price <= 0:
            raise QuoteError(original_symbol, f"invalid price data {price!r}")

        logger.debug(f"Fetched {original_symbol}: ${price}")
        return price
