"""Validation rules applied before a holding is admitted to the store.

All rules are pure. ``find_violations`` always runs every rule and returns the
violations in a fixed priority order (symbol, shares, price, duplicate), so the
same invalid input always reports the same first error.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from numbers import Real
from typing import Iterable, List, Optional

from portfolio_tracker.core.errors import (
    DuplicateSymbolError,
    HoldingValidationError,
    InvalidPriceError,
    InvalidSharesError,
    InvalidSymbolError,
)
from .models import HoldingCreate

SYMBOL_PATTERN = re.compile(r"^[A-Z]{1,5}$")


@dataclass(frozen=True)
class ValidationPolicy:
    """Optional, explicitly configured portfolio policies."""

    require_single_share: bool = False


DEFAULT_POLICY = ValidationPolicy()


def normalize_symbol(raw: str) -> str:
    """Canonical form of a ticker symbol ('  aapl ' -> 'AAPL')."""
    return raw.strip().upper()


def _is_positive_number(value: object) -> bool:
    # bool is a Real subclass; True must not pass as one share
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value) and value > 0


def validate_symbol(raw: object) -> str:
    """Return the canonical symbol or raise InvalidSymbolError."""
    if not isinstance(raw, str):
        raise InvalidSymbolError(f"Symbol must be a string, got {raw!r}")
    symbol = normalize_symbol(raw)
    if not SYMBOL_PATTERN.match(symbol):
        raise InvalidSymbolError(f"Ticker must be 1-5 letters, got {raw!r}")
    return symbol


def validate_shares(shares: object, policy: ValidationPolicy = DEFAULT_POLICY) -> None:
    if not _is_positive_number(shares):
        raise InvalidSharesError(f"Shares must be a positive number, got {shares!r}")
    if policy.require_single_share and shares != 1:
        raise InvalidSharesError(f"Quantity must be 1, got {shares!r}")


def validate_price(price: object) -> None:
    if not _is_positive_number(price):
        raise InvalidPriceError(f"Purchase price must be greater than 0, got {price!r}")


def check_duplicate(symbol: str, existing_symbols: Iterable[str]) -> None:
    symbol = normalize_symbol(symbol)
    if any(normalize_symbol(s) == symbol for s in existing_symbols):
        raise DuplicateSymbolError(symbol)


def find_violations(
    candidate: HoldingCreate,
    existing_symbols: Iterable[str] = (),
    policy: ValidationPolicy = DEFAULT_POLICY,
) -> List[HoldingValidationError]:
    """Run every rule against a candidate.

    Args:
        candidate: Holding to validate
        existing_symbols: Symbols already in the portfolio
        policy: Optional policies to enforce

    Returns:
        Violations in priority order; empty if the candidate is valid
    """
    violations: List[HoldingValidationError] = []
    symbol: Optional[str] = None

    try:
        symbol = validate_symbol(candidate.symbol)
    except HoldingValidationError as e:
        violations.append(e)

    try:
        validate_shares(candidate.shares, policy)
    except HoldingValidationError as e:
        violations.append(e)

    try:
        validate_price(candidate.purchase_price)
    except HoldingValidationError as e:
        violations.append(e)

    # A malformed symbol can't collide with a stored one
    if symbol is not None:
        try:
            check_duplicate(symbol, existing_symbols)
        except HoldingValidationError as e:
            violations.append(e)

    return violations


def validate_candidate(
    candidate: HoldingCreate,
    existing_symbols: Iterable[str] = (),
    policy: ValidationPolicy = DEFAULT_POLICY,
) -> HoldingCreate:
    """Validate a candidate and return it with its canonical symbol.

    Raises:
        HoldingValidationError: The highest-priority violated rule
    """
    violations = find_violations(candidate, existing_symbols, policy)
    if violations:
        raise violations[0]
    return candidate.model_copy(update={"symbol": normalize_symbol(candidate.symbol)})
