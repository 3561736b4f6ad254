"""Portfolio holdings, validation and valuation."""

from .models import (
    EnrichedHolding,
    Holding,
    HoldingCreate,
    PortfolioSummary,
    PortfolioValuation,
    TopPerformer,
)
from .store import HoldingStore
from .validation import ValidationPolicy, find_violations, validate_candidate
from .valuation import ValuationService, enrich_holding, summarize

__all__ = [
    "EnrichedHolding",
    "Holding",
    "HoldingCreate",
    "PortfolioSummary",
    "PortfolioValuation",
    "TopPerformer",
    "HoldingStore",
    "ValidationPolicy",
    "find_violations",
    "validate_candidate",
    "ValuationService",
    "enrich_holding",
    "summarize",
]
