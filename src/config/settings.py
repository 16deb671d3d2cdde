import os
from dataclasses import dataclass, field
from typing import Mapping

from dotenv import load_dotenv

from src.models.errors import ConfigError

DEFAULT_NOTIFICATIONS_URL = "https://integrations.api.bold.co/payments/webhook/notifications"


@dataclass(frozen=True)
class RelayConfig:
    """Process-wide settings, built once at startup and passed explicitly."""

    secret_key: str = field(default="", repr=False)
    api_key: str = field(default="", repr=False)
    host: str = "0.0.0.0"
    port: int = 3001
    notifications_url: str = DEFAULT_NOTIFICATIONS_URL
    lookup_timeout_seconds: float = 10
    log_level: str = "INFO"

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        dotenv_path: str | None = None,
    ) -> "RelayConfig":
        """Build a config from environment variables.

        When ``env`` is None the process environment is used, after loading
        a ``.env`` file (``dotenv_path`` or the nearest one found).
        """
        if env is None:
            load_dotenv(dotenv_path)
            env = os.environ

        return cls(
            secret_key=env.get("BOLD_SECRET_KEY", ""),
            api_key=env.get("BOLD_API_KEY", ""),
            host=env.get("HOST") or "0.0.0.0",
            port=_parse_int(env, "PORT", 3001),
            notifications_url=(
                env.get("BOLD_NOTIFICATIONS_URL") or DEFAULT_NOTIFICATIONS_URL
            ).rstrip("/"),
            lookup_timeout_seconds=_parse_float(env, "BOLD_LOOKUP_TIMEOUT", 10),
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        )


def _parse_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


def _parse_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None
