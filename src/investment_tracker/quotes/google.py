"""Google Finance quote provider."""
from __future__ import annotations

import logging

import requests
from bs4 import BeautifulSoup

from ..errors import QuoteUnavailableError
from .base import QuoteProvider
from .utils import parse_price

LOGGER = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "accept-language": "en-US,en;q=0.9",
    "user-agent": "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/141.0.0.0 Safari/537.36",
}

# Google renders the last price in this div when the data attribute is absent.
PRICE_CLASS = "YMlKec fxKbKc"


class GoogleFinanceQuoteProvider(QuoteProvider):
    """Scrape the last price from a Google Finance quote page.

    Symbols must carry their exchange, for example ``AAPL:NASDAQ``.
    """

    name = "google"
    BASE_URL = "https://www.google.com/finance/quote"

    def __init__(self, session: requests.Session | None = None, timeout: float = 30) -> None:
        self.session = session or requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)
        self.timeout = timeout

    def _get_soup(self, symbol: str) -> BeautifulSoup:
        LOGGER.debug("Requesting Google Finance page for %s", symbol)
        try:
            response = self.session.get(f"{self.BASE_URL}/{symbol}", timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise QuoteUnavailableError(symbol, f"request failed: {exc}") from exc
        return BeautifulSoup(response.text, "html.parser")

    def get_price(self, symbol: str) -> float:
        soup = self._get_soup(symbol)
        price = None
        tagged = soup.find(attrs={"data-last-price": True})
        if tagged is not None:
            price = parse_price(tagged["data-last-price"])
        if price is None:
            div = soup.find("div", class_=PRICE_CLASS)
            if div is not None:
                price = parse_price(div.get_text(strip=True))
        if price is None:
            raise QuoteUnavailableError(symbol, "no price found on quote page")
        LOGGER.debug("Google Finance price for %s is %s", symbol, price)
        return price


__all__ = ["GoogleFinanceQuoteProvider"]
