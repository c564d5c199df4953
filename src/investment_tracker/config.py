"""Application configuration helpers."""
from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Mapping, Tuple


DEFAULT_CONFIG_PATH = "config.json"
DEFAULT_QUOTE_PROVIDER = "yahoo"
DEFAULT_SCHEDULE = "02:00"
DEFAULT_TIMEZONE = "UTC"


def _resolve_env_file(candidate: str) -> Path | None:
    """Return the first matching environment file path if it exists."""

    path = Path(candidate)
    if path.is_absolute():
        return path if path.exists() else None

    search_roots = [Path.cwd(), Path(__file__).resolve().parent]
    search_roots.extend(Path(__file__).resolve().parents)

    seen: set[Path] = set()
    for root in search_roots:
        root = root.resolve()
        if root in seen:
            continue
        seen.add(root)
        potential = root / candidate
        if potential.exists():
            return potential
    return None


def _parse_env_file(path: Path) -> dict[str, str]:
    """Parse a dotenv-style file into a mapping."""

    variables: dict[str, str] = {}
    for raw_line in path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export ") :].strip()
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        variables[key.strip()] = value.strip().strip('"').strip("'")
    return variables


def _load_profile_env(env: Mapping[str, str]) -> dict[str, str]:
    """Load environment variables from the selected profile file."""

    explicit_file = env.get("INVESTMENT_TRACKER_ENV_FILE")
    profile = env.get("INVESTMENT_TRACKER_ENV", "local")
    candidate = explicit_file or f".env.{profile}"

    path = _resolve_env_file(candidate)
    if path is not None:
        return _parse_env_file(path)
    return {}


def parse_schedule_time(value: str) -> Tuple[int, int]:
    """Parse ``HH:MM`` into an hour/minute pair."""

    value = value.strip()
    if not value or ":" not in value:
        raise ValueError("Time must be in HH:MM format")
    hour_str, minute_str = value.split(":", 1)
    hour = int(hour_str)
    minute = int(minute_str)
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValueError("Hours must be 0-23 and minutes 0-59")
    return hour, minute


@dataclass(frozen=True)
class Settings:
    """Runtime configuration."""

    config_path: Path
    quote_provider: str = DEFAULT_QUOTE_PROVIDER
    mailgun_domain: str | None = None
    mailgun_api_key: str | None = None
    mail_from: str | None = None
    mail_to: Tuple[str, ...] = ()
    schedule_hour: int = 2
    schedule_minute: int = 0
    timezone: str = DEFAULT_TIMEZONE

    @property
    def email_enabled(self) -> bool:
        return bool(self.mailgun_domain and self.mailgun_api_key and self.mail_to)

    @staticmethod
    def load(env: Mapping[str, str] | None = None) -> "Settings":
        """Load settings from environment variables."""

        base_env = dict(os.environ if env is None else env)
        file_env = _load_profile_env(base_env)
        # Environment variables set in the shell take precedence over the file.
        merged_env = {**file_env, **base_env}

        config_path = Path(merged_env.get("INVESTMENT_TRACKER_CONFIG_PATH") or DEFAULT_CONFIG_PATH)
        quote_provider = (
            merged_env.get("INVESTMENT_TRACKER_QUOTE_PROVIDER") or DEFAULT_QUOTE_PROVIDER
        ).strip().lower()

        domain = merged_env.get("INVESTMENT_TRACKER_MAILGUN_DOMAIN") or None
        mail_from = merged_env.get("INVESTMENT_TRACKER_MAIL_FROM") or None
        if mail_from is None and domain:
            mail_from = f"investment@{domain}"
        recipients = tuple(
            chunk.strip()
            for chunk in merged_env.get("INVESTMENT_TRACKER_MAIL_TO", "").split(",")
            if chunk.strip()
        )

        schedule = merged_env.get("INVESTMENT_TRACKER_SCHEDULE") or DEFAULT_SCHEDULE
        try:
            hour, minute = parse_schedule_time(schedule)
        except ValueError as exc:
            raise RuntimeError(
                f"INVESTMENT_TRACKER_SCHEDULE must be HH:MM, got {schedule!r}"
            ) from exc

        return Settings(
            config_path=config_path,
            quote_provider=quote_provider,
            mailgun_domain=domain,
            mailgun_api_key=merged_env.get("INVESTMENT_TRACKER_MAILGUN_API_KEY") or None,
            mail_from=mail_from,
            mail_to=recipients,
            schedule_hour=hour,
            schedule_minute=minute,
            timezone=merged_env.get("INVESTMENT_TRACKER_TIMEZONE") or DEFAULT_TIMEZONE,
        )


__all__ = ["Settings", "parse_schedule_time", "DEFAULT_CONFIG_PATH"]
