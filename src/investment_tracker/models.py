"""Domain models representing tracked investments."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Investment:
    """Represents a single purchase lot."""

    symbol: str
    date: datetime
    total: float
    units: float


@dataclass(frozen=True, slots=True)
class Performance:
    """One measurement of an investment's price and annualized return."""

    symbol: str
    price: float
    compound_interest: float  # percentage
    date: datetime


@dataclass(slots=True)
class Config:
    """The whole persisted state: investments and their history by symbol."""

    investments: list[Investment] = field(default_factory=list)
    history: dict[str, list[Performance]] = field(default_factory=dict)


__all__ = ["Investment", "Performance", "Config"]
