"""Pydantic schemas for portfolio operations."""

from datetime import datetime, timezone
from typing import List, Optional, Union

from pydantic import BaseModel, Field, StrictBool


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Booleans pass through unconverted so the validation rules can reject them
Quantity = Union[float, StrictBool]


class HoldingCreate(BaseModel):
    """Schema for a candidate holding.

    Domain constraints (symbol format, positive shares and price) are enforced
    by the validation rules, not by the schema, so every rejection carries the
    same error type no matter which surface it came through.
    """

    symbol: str
    shares: Quantity
    purchase_price: Quantity = Field(..., description="Price per share at acquisition")
    name: Optional[str] = Field(None, max_length=100, description="Company name")


class Holding(BaseModel):
    """A holding admitted to the store."""

    symbol: str
    shares: float
    purchase_price: float
    name: Optional[str] = None
    added_at: datetime = Field(default_factory=_utcnow)

    class Config:
        frozen = True
        from_attributes = True

    @property
    def total_cost(self) -> float:
        return self.shares * self.purchase_price


class EnrichedHolding(Holding):
    """Holding with current market data attached for a single query."""

    current_price: Optional[float] = None
    current_value: float
    total_investment: float
    gain_loss: Optional[float] = None
    percent_change: Optional[float] = None

    @property
    def is_priced(self) -> bool:
        return self.current_price is not None


class TopPerformer(BaseModel):
    """Holding with the highest percentage gain among priced holdings."""

    symbol: str
    gain_percentage: float


class PortfolioSummary(BaseModel):
    """Portfolio summary with aggregated metrics."""

    total_value: float
    total_investment: float
    total_gain_loss: float
    gain_loss_percentage: float
    top_performer: Optional[TopPerformer] = None
    holdings_count: int
    priced_count: int


class PortfolioValuation(BaseModel):
    """Enriched holdings and summary computed from one round of quotes."""

    holdings: List[EnrichedHolding]
    summary: PortfolioSummary
    partial: bool = False
    unpriced_symbols: List[str] = Field(default_factory=list)
