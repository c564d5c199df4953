"""Yahoo Finance quote provider."""
from __future__ import annotations

import logging
from typing import Any

import requests

from ..errors import QuoteUnavailableError
from .base import QuoteProvider

LOGGER = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "accept": "application/json",
    "accept-language": "en-US,en;q=0.9",
    "user-agent": "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/141.0.0.0 Safari/537.36",
}


class YahooQuoteProvider(QuoteProvider):
    """Read ``regularMarketPrice`` from the Yahoo Finance chart API."""

    name = "yahoo"
    BASE_URL = "https://query1.finance.yahoo.com/v8/finance/chart"

    def __init__(self, session: requests.Session | None = None, timeout: float = 30) -> None:
        self.session = session or requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)
        self.timeout = timeout

    def _get_chart(self, symbol: str) -> dict[str, Any]:
        LOGGER.debug("Requesting Yahoo chart for %s", symbol)
        try:
            response = self.session.get(
                f"{self.BASE_URL}/{symbol}",
                params={"interval": "1d", "range": "1d"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json()
        except requests.RequestException as exc:
            raise QuoteUnavailableError(symbol, f"request failed: {exc}") from exc
        except ValueError as exc:
            raise QuoteUnavailableError(symbol, "response is not JSON") from exc

    def get_price(self, symbol: str) -> float:
        payload = self._get_chart(symbol)
        chart = (payload.get("chart") if isinstance(payload, dict) else None) or {}
        if chart.get("error"):
            error = chart["error"]
            description = error.get("description") if isinstance(error, dict) else error
            raise QuoteUnavailableError(symbol, str(description))
        try:
            price = chart["result"][0]["meta"]["regularMarketPrice"]
            price = float(price)
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise QuoteUnavailableError(symbol, "no market price in response") from exc
        LOGGER.debug("Yahoo price for %s is %s", symbol, price)
        return price


__all__ = ["YahooQuoteProvider"]
