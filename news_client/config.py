"""
Client settings.

The client reads no environment on its own: applications build a
ClientSettings directly, or opt in to ClientSettings.from_env().
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

NEWS_API_URL = "https://newsapi.org/"

# 5 MiB of cache
CACHE_SIZE_BYTES = 5 * 1024 * 1024
CACHE_MAX_AGE = 60 * 60  # 1 hour
CACHE_MAX_STALE = 3 * 24 * 60 * 60  # 3 days
HTTP_CACHE_DIRNAME = "http-cache"


@dataclass(frozen=True)
class ClientSettings:
    base_url: str = NEWS_API_URL
    cache_size: int = CACHE_SIZE_BYTES
    max_age: int = CACHE_MAX_AGE
    max_stale: int = CACHE_MAX_STALE
    timeout: float = 30.0
    max_workers: int = 4
    log_bodies: bool = True
    # Only search uses this; headlines and sources take the key from a Specification
    api_key: Optional[str] = None

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "ClientSettings":
        """
        Build settings from the environment, loading a .env file first.

        Recognized variables: NEWS_API_BASE_URL, NEWS_API_KEY, NEWS_API_TIMEOUT,
        NEWS_API_MAX_WORKERS, NEWS_API_LOG_BODIES. Unset variables keep defaults.
        """
        if env_file:
            if Path(env_file).exists():
                load_dotenv(env_file)
            else:
                logger.debug("No .env file at %s, using system environment", env_file)
        else:
            load_dotenv()

        defaults = cls()
        return cls(
            base_url=os.getenv("NEWS_API_BASE_URL") or defaults.base_url,
            api_key=os.getenv("NEWS_API_KEY") or defaults.api_key,
            timeout=_env_number("NEWS_API_TIMEOUT", float, defaults.timeout),
            max_workers=_env_number("NEWS_API_MAX_WORKERS", int, defaults.max_workers),
            log_bodies=_env_bool("NEWS_API_LOG_BODIES", defaults.log_bodies),
        )


def _env_number(key: str, kind, default):
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return kind(raw)
    except ValueError:
        raise ValueError(f"Environment variable {key} must be a number, got {raw!r}") from None


def _env_bool(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")
