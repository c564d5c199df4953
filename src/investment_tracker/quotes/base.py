"""Base classes for market quote providers."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping

from ..errors import QuoteUnavailableError


class QuoteProvider(ABC):
    """Abstract source of the latest traded price for a symbol."""

    name = "abstract"

    @abstractmethod
    def get_price(self, symbol: str) -> float:
        """Return the latest price or raise :class:`QuoteUnavailableError`."""


class StaticQuoteProvider(QuoteProvider):
    """Serve canned prices, for dry runs and tests."""

    name = "static"

    def __init__(self, prices: Mapping[str, float]) -> None:
        self.prices = dict(prices)
        self.requested: list[str] = []

    def get_price(self, symbol: str) -> float:
        self.requested.append(symbol)
        try:
            return self.prices[symbol]
        except KeyError:
            raise QuoteUnavailableError(symbol, "no price configured") from None


__all__ = ["QuoteProvider", "StaticQuoteProvider"]
