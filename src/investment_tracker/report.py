"""Plain text rendering of the portfolio report."""
from __future__ import annotations

import io
from typing import TextIO

from .history import HUMAN_DATE, HistoryStore
from .models import Config


class ReportFormatter:
    """Render one block per investment, in the order they were added."""

    def write(self, stream: TextIO, config: Config) -> None:
        store = HistoryStore(config.history)
        for investment in config.investments:
            stream.write(
                f"==={investment.symbol} {investment.total:.2f} "
                f"{investment.date.strftime(HUMAN_DATE)} ===\n"
            )
            if investment.symbol not in store:
                continue
            for performance in store.deduplicated(investment.symbol):
                stream.write(
                    f"{performance.date.strftime(HUMAN_DATE)} "
                    f"{performance.compound_interest:.2f} %\n"
                )
            stream.write("\n")

    def render(self, config: Config) -> str:
        buffer = io.StringIO()
        self.write(buffer, config)
        return buffer.getvalue()


__all__ = ["ReportFormatter"]
