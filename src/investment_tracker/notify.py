"""Delivery of rendered reports."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Sequence

import requests

from .errors import NotificationError
from .history import HUMAN_DATE
from .rates import local_now

LOGGER = logging.getLogger(__name__)


class Notifier(ABC):
    """Abstract report sink."""

    @abstractmethod
    def send(self, report: str) -> None:
        """Deliver ``report`` or raise :class:`NotificationError`."""


class MailgunNotifier(Notifier):
    """Send the report as a plain text e-mail through the Mailgun HTTP API."""

    BASE_URL = "https://api.mailgun.net/v3"

    def __init__(
        self,
        domain: str,
        api_key: str,
        sender: str,
        recipients: Sequence[str],
        session: requests.Session | None = None,
        clock: Callable[[], datetime] = local_now,
        timeout: float = 30,
    ) -> None:
        self.domain = domain
        self.api_key = api_key
        self.sender = sender
        self.recipients = list(recipients)
        self.session = session or requests.Session()
        self.clock = clock
        self.timeout = timeout

    def subject(self) -> str:
        return f"Investment Report - {self.clock().strftime(HUMAN_DATE)}"

    def send(self, report: str) -> None:
        LOGGER.info("Sending report to %s", ", ".join(self.recipients))
        try:
            response = self.session.post(
                f"{self.BASE_URL}/{self.domain}/messages",
                auth=("api", self.api_key),
                data={
                    "from": self.sender,
                    "to": self.recipients,
                    "subject": self.subject(),
                    "text": report,
                },
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise NotificationError(f"Mailgun request failed: {exc}") from exc
        if not response.ok:
            raise NotificationError(
                f"Mailgun rejected message: {response.status_code} {response.text}",
                status_code=response.status_code,
            )
        LOGGER.info("Mailgun accepted report: %s", response.text.strip())


__all__ = ["Notifier", "MailgunNotifier"]
