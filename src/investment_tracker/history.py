"""Append-only performance history keyed by symbol."""
from __future__ import annotations

from typing import Iterator

from .models import Performance

HUMAN_DATE = "%d-%b-%y"


def day_key(performance: Performance) -> str:
    """Calendar day of a measurement, as shown in reports."""

    return performance.date.strftime(HUMAN_DATE)


class HistoryStore:
    """Operates in place on a ``Config.history`` mapping.

    Writes never reorder or deduplicate. Duplicate days are only collapsed by
    :meth:`deduplicated`, which is a read-only view used when rendering.
    """

    def __init__(self, history: dict[str, list[Performance]]) -> None:
        self._history = history

    def append(self, symbol: str, performance: Performance) -> None:
        self._history.setdefault(symbol, []).append(performance)

    def history_for(self, symbol: str) -> list[Performance]:
        """Return the raw history for ``symbol``, oldest first."""

        return self._history.get(symbol, [])

    def deduplicated(self, symbol: str) -> Iterator[Performance]:
        """Yield one record per calendar day, newest first.

        When several records share a day the most recently appended one wins.
        """

        seen: set[str] = set()
        for performance in reversed(self.history_for(symbol)):
            key = day_key(performance)
            if key in seen:
                continue
            seen.add(key)
            yield performance

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._history


__all__ = ["HistoryStore", "HUMAN_DATE", "day_key"]
