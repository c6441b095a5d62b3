"""Settings read from the environment (and a local .env file)."""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .mutations import DEFAULT_FADE_DELAY_MS, RemoveRefreshPolicy

load_dotenv()

LOG_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Runtime configuration for the desktop app."""

    server_url: str = "http://127.0.0.1:8080"
    request_timeout: float = 30.0
    status_fade_ms: int = DEFAULT_FADE_DELAY_MS
    remove_refresh_policy: RemoveRefreshPolicy = RemoveRefreshPolicy.ALWAYS
    validate_input: bool = True
    log_level: int = logging.INFO

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from WATCH_* and LOG_LEVEL environment variables.

        Raises:
            ValueError: a variable holds an unusable value
        """
        level_name = os.getenv("LOG_LEVEL", "info").strip().lower()
        if level_name not in LOG_LEVELS:
            raise ValueError(f"Invalid LOG_LEVEL {level_name!r}")

        return cls(
            server_url=os.getenv("WATCH_SERVER_URL", cls.server_url),
            request_timeout=float(os.getenv("WATCH_REQUEST_TIMEOUT", str(cls.request_timeout))),
            status_fade_ms=int(os.getenv("WATCH_STATUS_FADE_MS", str(cls.status_fade_ms))),
            remove_refresh_policy=RemoveRefreshPolicy.parse(
                os.getenv("WATCH_REMOVE_REFRESH", RemoveRefreshPolicy.ALWAYS.value)
            ),
            validate_input=_parse_bool(os.getenv("WATCH_VALIDATE_INPUT", "true")),
            log_level=LOG_LEVELS[level_name],
        )
