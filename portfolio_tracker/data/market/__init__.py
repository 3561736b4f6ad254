"""Market data feeds (current prices)."""

from typing import Optional

from portfolio_tracker.config import Settings, get_settings

from .alpha_vantage import AlphaVantageQuoteSource
from .base import QuoteSource
from .models import Price
from .provider import YFinanceQuoteSource


def get_quote_source(settings: Optional[Settings] = None) -> QuoteSource:
    """Build the quote source selected by settings.quote_source."""
    settings = settings or get_settings()
    source = settings.quote_source.lower()

    if source == "yfinance":
        return YFinanceQuoteSource(timeout=settings.quote_timeout_seconds)
    if source == "alphavantage":
        return AlphaVantageQuoteSource(
            api_key=settings.alpha_vantage_api_key,
            timeout=settings.quote_timeout_seconds,
            base_url=settings.alpha_vantage_base_url,
        )
    raise ValueError(f"Unknown quote source: {settings.quote_source}")


__all__ = [
    "AlphaVantageQuoteSource",
    "Price",
    "QuoteSource",
    "YFinanceQuoteSource",
    "get_quote_source",
]
