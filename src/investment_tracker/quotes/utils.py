"""Utility helpers for quote parsing."""
from __future__ import annotations

import re
from typing import Optional


NON_NUMERIC = re.compile(r"[^0-9.\-]")


def parse_price(value: str | None) -> Optional[float]:
    """Parse a human readable price such as ``$1,234.50``."""

    if not value:
        return None
    cleaned = value.strip()
    try:
        return float(cleaned)
    except ValueError:
        cleaned = NON_NUMERIC.sub("", cleaned)
    try:
        return float(cleaned) if cleaned else None
    except ValueError:
        return None


__all__ = ["parse_price"]
