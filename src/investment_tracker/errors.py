"""Exceptions raised by the investment tracker."""
from __future__ import annotations

from typing import Optional


class InvestmentTrackerError(Exception):
    """Base exception for all tracker errors."""


class ConfigLoadError(InvestmentTrackerError):
    """The persisted state could not be read or is malformed."""


class ConfigWriteError(InvestmentTrackerError):
    """The persisted state could not be written."""


class InvestmentLineError(InvestmentTrackerError, ValueError):
    """Base class for errors parsing a ``symbol,date,total,units`` line."""


class MalformedInputError(InvestmentLineError):
    """The line does not contain exactly four fields."""


class InvalidDateError(InvestmentLineError):
    """The purchase date does not match the month/day/year pattern."""


class InvalidNumberError(InvestmentLineError):
    """The total cost or units field is not a number."""


class QuoteUnavailableError(InvestmentTrackerError):
    """The quote provider could not return a price for a symbol."""

    def __init__(self, symbol: str, message: str) -> None:
        super().__init__(f"{symbol}: {message}")
        self.symbol = symbol


class NotificationError(InvestmentTrackerError):
    """The report could not be delivered."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


__all__ = [
    "InvestmentTrackerError",
    "ConfigLoadError",
    "ConfigWriteError",
    "InvestmentLineError",
    "MalformedInputError",
    "InvalidDateError",
    "InvalidNumberError",
    "QuoteUnavailableError",
    "NotificationError",
]
