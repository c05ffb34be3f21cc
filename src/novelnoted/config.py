# ABOUTME: Environment-driven configuration for novelnoted.
# ABOUTME: Reads database location and metadata API settings; no credentials are embedded.

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from novelnoted.metadata.googlebooks import GOOGLE_BOOKS_URL
from novelnoted.store.connection import DEFAULT_DB_PATH

ENV_DB = "NOVELNOTED_DB"
ENV_API_KEY = "NOVELNOTED_GOOGLE_BOOKS_API_KEY"
ENV_API_URL = "NOVELNOTED_GOOGLE_BOOKS_URL"
ENV_HTTP_TIMEOUT = "NOVELNOTED_HTTP_TIMEOUT"

_DEFAULT_HTTP_TIMEOUT = 30.0


class ConfigError(Exception):
    """Raised when an environment variable holds an unusable value."""


@dataclass(frozen=True)
class Settings:
    db_path: Path = DEFAULT_DB_PATH
    google_books_api_key: str | None = None
    google_books_url: str = GOOGLE_BOOKS_URL
    http_timeout: float = _DEFAULT_HTTP_TIMEOUT


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from environment variables.

    The API key has no fallback; without it requests go out unauthenticated.

    Raises:
        ConfigError: If NOVELNOTED_HTTP_TIMEOUT is not a positive number.
    """
    env = os.environ if environ is None else environ

    db = env.get(ENV_DB, "").strip()
    timeout_raw = env.get(ENV_HTTP_TIMEOUT, "").strip()
    timeout = _DEFAULT_HTTP_TIMEOUT
    if timeout_raw:
        try:
            timeout = float(timeout_raw)
        except ValueError as exc:
            raise ConfigError(f"{ENV_HTTP_TIMEOUT} must be a number, got {timeout_raw!r}") from exc
        if timeout <= 0:
            raise ConfigError(f"{ENV_HTTP_TIMEOUT} must be positive, got {timeout}")

    return Settings(
        db_path=Path(db).expanduser() if db else DEFAULT_DB_PATH,
        google_books_api_key=env.get(ENV_API_KEY, "").strip() or None,
        google_books_url=env.get(ENV_API_URL, "").strip() or GOOGLE_BOOKS_URL,
        http_timeout=timeout,
    )
