"""Parsing helpers for investment lines and stored timestamps."""
from __future__ import annotations

import re
from datetime import datetime, timezone

from dateutil import parser

from .errors import InvalidDateError, InvalidNumberError, MalformedInputError
from .models import Investment

# Month/day/year. A two-digit year follows the POSIX convention of %y.
PURCHASE_DATE_FORMATS = ("%m/%d/%Y", "%m/%d/%y")

# Plain decimal or exponent notation, inf or nan. No padding or digit separators.
NUMBER = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE | re.ASCII,
)


def parse_purchase_date(value: str) -> datetime:
    """Parse an ``M/D/YYYY`` date into midnight UTC."""

    for fmt in PURCHASE_DATE_FORMATS:
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            continue
        return parsed.replace(tzinfo=timezone.utc)
    raise InvalidDateError(f"invalid purchase date {value!r}, expected M/D/YYYY")


def _parse_number(name: str, value: str) -> float:
    if not NUMBER.fullmatch(value):
        raise InvalidNumberError(f"invalid {name} {value!r}")
    return float(value)


def parse_investment_line(line: str) -> Investment:
    """Parse ``symbol,date,total,units`` into an :class:`Investment`.

    The symbol is kept verbatim and no range checks are applied to the numbers;
    zero or negative values are accepted here and show up later as odd rates.
    """

    fields = line.split(",")
    if len(fields) != 4:
        raise MalformedInputError(
            f"investment line format incorrect: expected 4 fields, got {len(fields)}"
        )
    symbol, date_text, total_text, units_text = fields
    return Investment(
        symbol=symbol,
        date=parse_purchase_date(date_text),
        total=_parse_number("total", total_text),
        units=_parse_number("units", units_text),
    )


def parse_timestamp(value: str) -> datetime:
    """Parse a stored ISO-8601 timestamp using dateutil."""

    return parser.isoparse(value)


__all__ = ["parse_investment_line", "parse_purchase_date", "parse_timestamp"]
