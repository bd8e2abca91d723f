"""
HTTP plumbing for the news API client.

A requests.Session with a CacheControl adapter in front of a size-bounded
diskcache store, a rule that rewrites caching headers on network responses,
and a response hook that logs every exchange.
"""
from __future__ import annotations

import logging
import sqlite3
import time
from datetime import datetime, timezone
from email.utils import formatdate
from pathlib import Path
from typing import Callable, Optional, Union

import diskcache
import requests
from cachecontrol import CacheControlAdapter
from cachecontrol.cache import BaseCache
from cachecontrol.heuristics import BaseHeuristic

from .config import HTTP_CACHE_DIRNAME, ClientSettings
from .exceptions import CacheUnavailableError

logger = logging.getLogger(__name__)


class DiskCache(BaseCache):
    """
    CacheControl storage backed by diskcache.

    The store is bounded by `size_limit` bytes with least-recently-used
    eviction. Entries are kept for their freshness lifetime plus `max_stale`
    seconds; CacheControl decides whether a stored entry is still fresh.
    """

    def __init__(self, directory: Union[str, Path], size_limit: int, max_stale: int = 0) -> None:
        self.directory = Path(directory)
        self.max_stale = max_stale
        try:
            self._cache = diskcache.Cache(
                str(self.directory),
                size_limit=size_limit,
                eviction_policy="least-recently-used",
            )
        except (OSError, sqlite3.Error) as e:
            raise CacheUnavailableError(f"Cannot open HTTP cache at {self.directory} ({e})") from e
        logger.debug("Opened HTTP cache at %s (limit %d bytes)", self.directory, size_limit)

    def get(self, key: str) -> Optional[bytes]:
        return self._cache.get(key)

    def set(self, key: str, value: bytes, expires: Union[int, datetime, None] = None) -> None:
        self._cache.set(key, value, expire=self._lifetime(expires))

    def delete(self, key: str) -> None:
        self._cache.delete(key)

    def close(self) -> None:
        self._cache.close()

    def volume(self) -> int:
        """Approximate on-disk size of the store in bytes."""
        return self._cache.volume()

    def _lifetime(self, expires: Union[int, datetime, None]) -> Optional[float]:
        if expires is None:
            return None
        if isinstance(expires, datetime):
            if expires.tzinfo is None:
                expires = expires.replace(tzinfo=timezone.utc)
            seconds = (expires - datetime.now(timezone.utc)).total_seconds()
        else:
            seconds = float(expires)
        return max(seconds, 0.0) + self.max_stale


class CacheControlOverride(BaseHeuristic):
    """
    Rewrite caching headers on responses fetched from the network.

    Drops any Pragma header and replaces Cache-Control with a fixed policy, so
    the cache treats every response as fresh for `max_age` seconds regardless
    of what the server sent. CacheControl only runs heuristics on network
    responses; cache hits are served untouched.
    """

    def __init__(self, max_age: int, max_stale: int) -> None:
        self.max_age = max_age
        self.max_stale = max_stale

    @property
    def cache_control(self) -> str:
        return f"max-age={self.max_age}, max-stale={self.max_stale}"

    def apply(self, response):
        response.headers.discard("Pragma")
        return super().apply(response)

    def update_headers(self, response):
        headers = {"Cache-Control": self.cache_control}
        # Freshness is measured from Date; without it nothing gets cached
        if "date" not in response.headers:
            headers["Date"] = formatdate(time.time(), usegmt=True)
        return headers

    def warning(self, response):
        return None


def make_logging_hook(log_bodies: bool = True) -> Callable[..., requests.Response]:
    """Build a response hook that logs each request/response pair at DEBUG."""

    def log_exchange(response: requests.Response, *args, **kwargs) -> requests.Response:
        if not logger.isEnabledFor(logging.DEBUG):
            return response
        request = response.request
        origin = "cache" if getattr(response, "from_cache", False) else "network"
        logger.debug("--> %s %s", request.method, request.url)
        if log_bodies and request.body:
            logger.debug("%s", _as_text(request.body))
        logger.debug("<-- %d %s (%s)", response.status_code, response.url, origin)
        if log_bodies:
            logger.debug("%s", response.text)
        return response

    return log_exchange


def _as_text(body: Union[str, bytes]) -> str:
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    return body


def build_session(cache_dir: Union[str, Path], settings: ClientSettings) -> requests.Session:
    """
    Assemble the shared session: disk cache, header rewriting, logging.

    Raises CacheUnavailableError if the cache directory cannot be opened.
    """
    cache = DiskCache(
        Path(cache_dir) / HTTP_CACHE_DIRNAME,
        size_limit=settings.cache_size,
        max_stale=settings.max_stale,
    )
    adapter = CacheControlAdapter(
        cache=cache,
        heuristic=CacheControlOverride(settings.max_age, settings.max_stale),
    )

    session = requests.Session()
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers.update({"Accept": "application/json"})
    session.hooks["response"].append(make_logging_hook(settings.log_bodies))
    return session
