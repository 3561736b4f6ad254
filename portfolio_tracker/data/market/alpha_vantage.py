"""Quote source backed by the Alpha Vantage GLOBAL_QUOTE endpoint."""

from __future__ import annotations

import logging
import math

import requests

from portfolio_tracker.core.errors import QuoteError
from .base import QuoteSource

logger = logging.getLogger(__name__)

ALPHA_VANTAGE_URL = "https://www.alphavantage.co/query"


class AlphaVantageQuoteSource(QuoteSource):
    """Alpha Vantage quotes over plain HTTP."""

    def __init__(
        self,
        api_key: str,
        timeout: int = 10,
        base_url: str = ALPHA_VANTAGE_URL,
        session: requests.Session | None = None,
    ):
        self.api_key = api_key
        self.timeout = timeout
        self.base_url = base_url
        self.session = session or requests.Session()

    @property
    def name(self) -> str:
        return "alphavantage"

    def fetch_price(self, symbol: str) -> float:
        symbol = symbol.upper()
        try:
            response = self.session.get(
                self.base_url,
                params={
                    "function": "GLOBAL_QUOTE",
                    "symbol": symbol,
                    "apikey": self.api_key,
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.Timeout as e:
            logger.warning(f"Timeout after {self.timeout}s fetching {symbol} from Alpha Vantage")
            raise QuoteError(symbol, "request timed out") from e
        except requests.RequestException as e:
            logger.warning(f"Alpha Vantage request failed for {symbol}: {e}")
            raise QuoteError(symbol, str(e)) from e
        except ValueError as e:
            raise QuoteError(symbol, "response is not JSON") from e

        # Alpha Vantage answers 200 with a "Note"/"Information" body when throttled
        quote = data.get("Global Quote") if isinstance(data, dict) else None
        if not quote or not quote.get("05. price"):
            logger.warning(f"Unexpected Alpha Vantage response for {symbol}: {data!r}")
            raise QuoteError(symbol, "invalid API response format")

        try:
            price = float(quote["05. price"])
        except (TypeError, ValueError) as e:
            raise QuoteError(symbol, "invalid price data received") from e
        if not math.isfinite(price) or price <= 0:
            raise QuoteError(symbol, f"invalid price data {price!r}")

        logger.debug(f"Fetched {symbol}: ${price}")
        return price
