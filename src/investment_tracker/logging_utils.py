"""Logging configuration helpers for the investment tracker."""
from __future__ import annotations

import logging
import os


def _coerce_level(level: str | int) -> int:
    """Translate a user provided level into a numeric log level."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def configure_logging(level: str | int | None = None, *, force: bool = False) -> None:
    """Configure the root logger for console output.

    The level defaults to ``INVESTMENT_TRACKER_LOG_LEVEL`` and falls back to INFO
    when that is unset or unknown. ``force`` mirrors :func:`logging.basicConfig`.
    """

    if level is None:
        level = os.getenv("INVESTMENT_TRACKER_LOG_LEVEL", "INFO")
    try:
        resolved_level = _coerce_level(level)
    except ValueError:
        resolved_level = logging.INFO

    root_logger = logging.getLogger()
    if root_logger.handlers and not force:
        root_logger.setLevel(resolved_level)
        return

    logging.basicConfig(
        level=resolved_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        force=force,
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)


__all__ = ["configure_logging"]
