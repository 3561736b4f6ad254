"""Domain errors for portfolio operations.

Every error carries a stable ``code`` so callers can react to the reason
without parsing messages.
"""

from __future__ import annotations


class PortfolioError(Exception):
    """Base class for portfolio errors."""

    code = "portfolio_error"


class HoldingValidationError(PortfolioError):
    """A candidate holding was rejected. Caller-correctable, never retried."""

    code = "validation_error"


class InvalidSymbolError(HoldingValidationError):
    code = "invalid_symbol"


class InvalidSharesError(HoldingValidationError):
    code = "invalid_shares"


class InvalidPriceError(HoldingValidationError):
    code = "invalid_price"


class DuplicateSymbolError(HoldingValidationError):
    code = "duplicate_symbol"

    def __init__(self, symbol: str):
        super().__init__(f"Holding for {symbol} already exists")
        self.symbol = symbol


class CapacityExceededError(HoldingValidationError):
    code = "capacity_exceeded"

    def __init__(self, max_holdings: int):
        super().__init__(f"Maximum portfolio size ({max_holdings} holdings) reached")
        self.max_holdings = max_holdings


class HoldingNotFoundError(PortfolioError):
    code = "not_found"

    def __init__(self, symbol: str):
        super().__init__(f"Holding for {symbol} not found")
        self.symbol = symbol


class QuoteError(PortfolioError):
    """A quote lookup failed (network, unknown symbol, bad payload, timeout)."""

    code = "quote_unavailable"

    def __init__(self, symbol: str, reason: str):
        super().__init__(f"Could not fetch price for {symbol}: {reason}")
        self.symbol = symbol
        self.reason = reason
