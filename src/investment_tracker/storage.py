"""JSON persistence of the tracker state."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

from .errors import ConfigLoadError, ConfigWriteError
from .models import Config, Investment, Performance
from .parsing import parse_timestamp

LOGGER = logging.getLogger(__name__)


def investment_to_dict(investment: Investment) -> dict[str, Any]:
    return {
        "symbol": investment.symbol,
        "date": investment.date.isoformat(),
        "total": investment.total,
        "units": investment.units,
    }


def performance_to_dict(performance: Performance) -> dict[str, Any]:
    return {
        "symbol": performance.symbol,
        "price": performance.price,
        "compound_interest": performance.compound_interest,
        "date": performance.date.isoformat(),
    }


def config_to_dict(config: Config) -> dict[str, Any]:
    return {
        "investments": [investment_to_dict(item) for item in config.investments],
        "history": {
            symbol: [performance_to_dict(item) for item in records]
            for symbol, records in config.history.items()
        },
    }


def _investment_from_dict(raw: Mapping[str, Any]) -> Investment:
    return Investment(
        symbol=str(raw["symbol"]),
        date=parse_timestamp(raw["date"]),
        total=float(raw["total"]),
        units=float(raw["units"]),
    )


def _performance_from_dict(raw: Mapping[str, Any]) -> Performance:
    return Performance(
        symbol=str(raw["symbol"]),
        price=float(raw["price"]),
        compound_interest=float(raw["compound_interest"]),
        date=parse_timestamp(raw["date"]),
    )


def config_from_dict(raw: Mapping[str, Any]) -> Config:
    """Build a :class:`Config` from a decoded document.

    Missing or ``null`` sections load as empty collections.
    """

    investments = [_investment_from_dict(item) for item in raw.get("investments") or []]
    history = {
        symbol: [_performance_from_dict(item) for item in records or []]
        for symbol, records in (raw.get("history") or {}).items()
    }
    return Config(investments=investments, history=history)


def load_config(path: str | Path) -> Config:
    """Read the state file, returning an empty config when it does not exist."""

    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        LOGGER.info("No state found at %s, starting with an empty config", path)
        return Config()
    except OSError as exc:
        raise ConfigLoadError(f"unable to read {path}: {exc}") from exc

    try:
        raw = json.loads(text)
        if not isinstance(raw, dict):
            raise TypeError("top level must be an object")
        config = config_from_dict(raw)
    except (ValueError, TypeError, KeyError, AttributeError) as exc:
        raise ConfigLoadError(f"malformed config {path}: {exc}") from exc

    LOGGER.debug(
        "Loaded %d investments and %d history symbols from %s",
        len(config.investments),
        len(config.history),
        path,
    )
    return config


def write_config(path: str | Path, config: Config) -> None:
    """Replace the state file with ``config``."""

    path = Path(path)
    try:
        payload = json.dumps(config_to_dict(config))
    except (TypeError, ValueError) as exc:
        raise ConfigWriteError(f"unable to serialize config: {exc}") from exc
    try:
        path.write_text(payload + "\n", encoding="utf-8")
    except OSError as exc:
        raise ConfigWriteError(f"unable to write {path}: {exc}") from exc
    LOGGER.debug("Wrote %d investments to %s", len(config.investments), path)


__all__ = [
    "load_config",
    "write_config",
    "config_to_dict",
    "config_from_dict",
    "investment_to_dict",
    "performance_to_dict",
]
