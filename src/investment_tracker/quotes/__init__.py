"""Quote provider factory."""
from __future__ import annotations

import logging

from .base import QuoteProvider, StaticQuoteProvider
from .google import GoogleFinanceQuoteProvider
from .yahoo import YahooQuoteProvider

LOGGER = logging.getLogger(__name__)


def create_quote_provider(name: str) -> QuoteProvider:
    """Instantiate the quote provider registered under ``name``."""

    key = name.strip().lower()
    if key == YahooQuoteProvider.name:
        LOGGER.debug("Selected YahooQuoteProvider")
        return YahooQuoteProvider()
    if key == GoogleFinanceQuoteProvider.name:
        LOGGER.debug("Selected GoogleFinanceQuoteProvider")
        return GoogleFinanceQuoteProvider()
    raise ValueError(f"Unsupported quote provider: {name}")


__all__ = [
    "create_quote_provider",
    "QuoteProvider",
    "StaticQuoteProvider",
    "YahooQuoteProvider",
    "GoogleFinanceQuoteProvider",
]
