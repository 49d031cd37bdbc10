"""Runtime settings read from ARTWORK_BROWSER_* environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from ._version import __version__

DEFAULT_API_URL = "https://api.artic.edu/api/v1/artworks"
DEFAULT_PAGE_SIZE = 12
DEFAULT_HTTP_TIMEOUT = 10.0
DEFAULT_HTTP_RETRIES = 3
DEFAULT_USER_AGENT = f"artwork-browser/{__version__}"


def _env_str(name: str, default: str) -> str:
    return (os.getenv(name) or "").strip() or default


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value >= minimum else default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class BrowserConfig:
    api_url: str = DEFAULT_API_URL
    page_size: int = DEFAULT_PAGE_SIZE
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    http_retries: int = DEFAULT_HTTP_RETRIES
    user_agent: str = DEFAULT_USER_AGENT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> BrowserConfig:
        """Load settings from the environment; unusable values fall back to defaults."""
        return cls(
            api_url=_env_str("ARTWORK_BROWSER_API_URL", DEFAULT_API_URL).rstrip("/"),
            page_size=_env_int("ARTWORK_BROWSER_PAGE_SIZE", DEFAULT_PAGE_SIZE, minimum=1),
            http_timeout=_env_float("ARTWORK_BROWSER_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT),
            http_retries=_env_int("ARTWORK_BROWSER_HTTP_RETRIES", DEFAULT_HTTP_RETRIES),
            user_agent=_env_str("ARTWORK_BROWSER_USER_AGENT", DEFAULT_USER_AGENT),
            log_level=_env_str("ARTWORK_BROWSER_LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str | int = "INFO") -> None:
    """Install a basic stderr handler. Meant for launch scripts, not library code."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
