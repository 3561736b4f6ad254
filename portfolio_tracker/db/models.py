"""SQLAlchemy ORM models."""

from sqlalchemy import Column, DateTime, Float, Integer, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class HoldingRecord(Base):
    """Saved copy of a portfolio holding."""

    __tablename__ = "holdings"

    symbol = Column(String(5), primary_key=True)
    name = Column(String(100), nullable=True)
    shares = Column(Float, nullable=False)
    purchase_price = Column(Float, nullable=False)  # Per share
    position = Column(Integer, nullable=False)  # Insertion order
    added_at = Column(DateTime, nullable=False)  # UTC, naive

    def __repr__(self) -> str:
        return f"<HoldingRecord(symbol={self.symbol}, shares={self.shares})>"
