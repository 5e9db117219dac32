"""
Configuration.

Loads settings from environment variables (and a local .env file if present).
Only the CLI and the live web search read these; the resolver itself takes
no environment input.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Optional, TypeVar

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

T = TypeVar("T", int, float)


class ConfigError(Exception):
    """
    Raised when an environment variable holds an unusable value.
    """


def _env_number(name: str, default: str, cast: Callable[[str], T]) -> T:
    raw = os.getenv(name, default)
    try:
        return cast(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


class Settings:
    """Application settings loaded from environment"""

    def __init__(self) -> None:
        # Generative language API (used for live conference search)
        self.GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
        self.GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
        self.GEMINI_BASE_URL: str = os.getenv(
            "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta/models"
        )

        # Catalog location override
        self.CATALOG_PATH: str = os.getenv("CONFTRIP_CATALOG_PATH", "")

        # Outbound HTTP
        self.HTTP_TIMEOUT: float = _env_number("CONFTRIP_HTTP_TIMEOUT", "20", float)
        self.HTTP_RETRIES: int = _env_number("CONFTRIP_HTTP_RETRIES", "2", int)
        self.HTTP_BACKOFF: float = _env_number("CONFTRIP_HTTP_BACKOFF", "1.0", float)

    @property
    def catalog_path(self) -> Optional[Path]:
        """Catalog path override, or None for the packaged catalog"""
        return Path(self.CATALOG_PATH) if self.CATALOG_PATH.strip() else None

    @property
    def generate_url(self) -> str:
        """generateContent endpoint of the configured model"""
        return f"{self.GEMINI_BASE_URL.rstrip('/')}/{self.GEMINI_MODEL}:generateContent"


def get_settings() -> Settings:
    """
    Read settings fresh from the environment.
    A function instead of a module constant makes tests easier to isolate.
    Raises ConfigError for non-numeric timeout/retry values.
    """
    return Settings()
