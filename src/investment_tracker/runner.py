"""Command line entry point for the investment tracker."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional, TextIO

from .config import Settings
from .errors import InvestmentTrackerError
from .history import HistoryStore
from .logging_utils import configure_logging
from .models import Investment, Performance
from .notify import MailgunNotifier, Notifier
from .parsing import parse_investment_line
from .quotes import QuoteProvider, create_quote_provider
from .rates import Clock, RateCalculator, local_now
from .report import ReportFormatter
from .storage import load_config, write_config

LOGGER = logging.getLogger(__name__)


class AnalysisRun:
    """One all-or-nothing batch over every tracked investment.

    Prices are fetched one investment at a time in stored order. The state file
    is only written once every investment has a new measurement, so a failed
    fetch leaves it untouched and the next run starts from the beginning.
    """

    def __init__(
        self,
        config_path: str | Path,
        provider: QuoteProvider,
        notifier: Optional[Notifier] = None,
        clock: Clock = local_now,
        formatter: Optional[ReportFormatter] = None,
        output: Optional[TextIO] = None,
    ) -> None:
        self.config_path = Path(config_path)
        self.provider = provider
        self.notifier = notifier
        self.clock = clock
        self.calculator = RateCalculator(clock)
        self.formatter = formatter or ReportFormatter()
        self.output = output

    def measure(self, investment: Investment) -> Performance:
        price = self.provider.get_price(investment.symbol)
        # The clock is read per measurement, not once per run.
        now = self.clock()
        rate = self.calculator.rate(investment, price, now=now)
        LOGGER.info("%s price=%.2f rate=%.2f%%", investment.symbol, price, rate)
        return Performance(symbol=investment.symbol, price=price, compound_interest=rate, date=now)

    def run(self) -> str:
        """Measure, persist, render and deliver. Returns the report text."""

        config = load_config(self.config_path)
        store = HistoryStore(config.history)
        LOGGER.info("Analysing %d investments from %s", len(config.investments), self.config_path)
        for investment in config.investments:
            store.append(investment.symbol, self.measure(investment))

        write_config(self.config_path, config)
        report = self.formatter.render(config)
        if self.output is not None:
            self.output.write(report)
        if self.notifier is not None:
            self.notifier.send(report)
        return report


def add_investment(line: str, config_path: str | Path) -> Investment:
    """Parse ``line`` and append it to the persisted investments."""

    config = load_config(config_path)
    investment = parse_investment_line(line)
    config.investments.append(investment)
    write_config(config_path, config)
    LOGGER.info("Added %s to %s", investment.symbol, config_path)
    return investment


def create_notifier(settings: Settings) -> Optional[Notifier]:
    if not settings.email_enabled:
        LOGGER.debug("Mailgun settings incomplete; report will not be e-mailed")
        return None
    return MailgunNotifier(
        domain=settings.mailgun_domain or "",
        api_key=settings.mailgun_api_key or "",
        sender=settings.mail_from or f"investment@{settings.mailgun_domain}",
        recipients=settings.mail_to,
    )


def parse_args(args: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--add",
        default="",
        help='set an investment as "symbol,date(mm/dd/yyyy),total,units"; takes priority',
    )
    parser.add_argument(
        "--config",
        default=None,
        help="file to store the portfolio state in (default: config.json)",
    )
    parser.add_argument(
        "--no-email",
        action="store_true",
        help="Do not e-mail the report even when Mailgun is configured",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging output",
    )
    return parser.parse_args(args=args)


def main(argv: Iterable[str] | None = None) -> None:
    options = parse_args(argv)
    configure_logging(logging.DEBUG if options.verbose else None)
    try:
        settings = Settings.load()
        config_path = Path(options.config) if options.config else settings.config_path

        if options.add:
            print("adding", options.add)
            add_investment(options.add, config_path)
            return

        notifier = None if options.no_email else create_notifier(settings)
        provider = create_quote_provider(settings.quote_provider)
        AnalysisRun(config_path, provider, notifier, output=sys.stdout).run()
    # Settings.load raises RuntimeError and the provider factory ValueError.
    except (InvestmentTrackerError, ValueError, RuntimeError) as exc:
        LOGGER.error("%s", exc)
        print(exc, file=sys.stderr)


if __name__ == "__main__":  # pragma: no cover
    main()
