"""Annualized compounded return calculation."""
from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Callable, Optional

from .models import Investment

LOGGER = logging.getLogger(__name__)

# Average year length, accounting for leap years.
SECONDS_PER_YEAR = 365.25 * 24 * 60 * 60

Clock = Callable[[], datetime]


def local_now() -> datetime:
    """Wall clock time carrying the local UTC offset."""

    return datetime.now().astimezone()


def _divide(numerator: float, denominator: float) -> float:
    """IEEE-754 division: x/0 is a signed infinity and 0/0 is NaN."""

    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def _power(base: float, exponent: float) -> float:
    """IEEE-754 power that returns inf/NaN instead of raising."""

    if base < 0 and not math.isinf(exponent) and not exponent.is_integer():
        return math.nan
    if base == 0 and exponent < 0:
        return math.inf
    try:
        return base**exponent
    except OverflowError:
        return math.inf


class RateCalculator:
    """Compute the annualized compounded percentage return of an investment.

    Degenerate inputs are not guarded. ``units == 0`` makes the principal
    infinite, a purchase date equal to ``now`` makes the exponent infinite and
    a negative price ratio with a fractional exponent is NaN. These values are
    returned as-is and it is up to the caller to avoid them.
    """

    def __init__(self, clock: Clock = local_now) -> None:
        self._clock = clock

    def rate(self, investment: Investment, price: float, now: Optional[datetime] = None) -> float:
        if now is None:
            now = self._clock()
        principal = _divide(investment.total, investment.units)
        elapsed_years = (now - investment.date).total_seconds() / SECONDS_PER_YEAR
        growth = _power(_divide(price, principal), _divide(1.0, elapsed_years))
        rate = 100 * (growth - 1)
        LOGGER.debug(
            "Rate for %s: principal=%.4f price=%.4f years=%.4f rate=%.4f",
            investment.symbol,
            principal,
            price,
            elapsed_years,
            rate,
        )
        return rate


__all__ = ["RateCalculator", "SECONDS_PER_YEAR", "Clock", "local_now"]
