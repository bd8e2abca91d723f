from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import replace
from typing import Any, Callable, List, Optional, TypeVar

import requests

from .api import NewsApi
from .config import ClientSettings
from .context import RuntimeContext
from .exceptions import EmptyBodyError, FetchError, ParseError
from .http import build_session
from .models import Article, Source, Specification
from .observable import LiveValue
from .parser import parse_article_response, parse_source_response

logger = logging.getLogger(__name__)

T = TypeVar("T")


class NewsApiClient:
    """
    Process-wide client for the news API.

    Use get_instance() rather than the constructor: it builds the shared
    session, disk cache and worker pool exactly once, so the cache directory
    is never opened twice from the same process.

    The request methods return immediately with a LiveValue that is filled in
    from a worker thread. Nothing is published when the request fails; the
    reason is available on the LiveValue's error channel.
    """

    _lock = threading.Lock()
    _instance: Optional["NewsApiClient"] = None

    def __init__(self, api: NewsApi, settings: ClientSettings) -> None:
        self._api = api
        self.settings = settings

    @classmethod
    def get_instance(cls, context: RuntimeContext) -> "NewsApiClient":
        """
        Return the shared client, building it on first use.

        Raises CacheUnavailableError if the context's cache directory cannot
        be opened; no instance is kept in that case.
        """
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls._build(context)
        return cls._instance

    @classmethod
    def _build(cls, context: RuntimeContext) -> "NewsApiClient":
        settings = getattr(context, "settings", None) or ClientSettings()
        session = build_session(context.cache_dir, settings)
        executor = ThreadPoolExecutor(
            max_workers=settings.max_workers,
            thread_name_prefix="news-api",
        )
        api = NewsApi(session, settings.base_url, executor, timeout=settings.timeout)
        logger.info("News API client ready (base url %s, cache in %s)", settings.base_url, context.cache_dir)
        return cls(api, settings)

    @classmethod
    def _reset_instance(cls) -> None:
        """Drop the shared instance, waiting for in-flight calls. Used by tests."""
        with cls._lock:
            instance, cls._instance = cls._instance, None
        if instance is not None:
            instance._api.executor.shutdown(wait=True)
            instance._api.session.close()

    def get_headlines(self, spec: Specification) -> LiveValue[List[Article]]:
        live: LiveValue[List[Article]] = LiveValue()

        def unwrap(body: Any) -> List[Article]:
            # The API does not tag articles with the requested category
            return [replace(a, category=spec.category) for a in parse_article_response(body).articles]

        future = self._api.get_headlines(spec.category, spec.country, spec.api_key)
        _deliver(future, live, unwrap)
        return live

    def get_search_for_news(self, query: str) -> LiveValue[List[Article]]:
        live: LiveValue[List[Article]] = LiveValue()
        future = self._api.get_search_for_news(query, self.settings.api_key)
        _deliver(future, live, lambda body: parse_article_response(body).articles)
        return live

    def get_sources(self, spec: Specification) -> LiveValue[List[Source]]:
        live: LiveValue[List[Source]] = LiveValue()
        future = self._api.get_sources(spec.category, None, spec.api_key, None)
        _deliver(future, live, lambda body: parse_source_response(body).sources)
        return live


def _deliver(
    future: "Future[requests.Response]",
    live: LiveValue[T],
    unwrap: Callable[[Any], T],
) -> None:
    """Publish the unwrapped body of `future` to `live` once the call completes."""

    def on_done(fut: "Future[requests.Response]") -> None:
        try:
            response = fut.result()
        except requests.RequestException as e:
            logger.debug("Request failed: %s", e)
            error = FetchError(str(e))
            error.__cause__ = e
            live.post_error(error)
            return
        except Exception as e:
            logger.exception("Unexpected error while fetching")
            live.post_error(e)
            return

        if getattr(response, "from_cache", False):
            logger.debug("Response from cache")
        else:
            logger.debug("Response from server")

        if not response.ok:
            logger.debug("No body: HTTP %d for %s", response.status_code, response.url)
            live.post_error(EmptyBodyError(
                f"HTTP {response.status_code} for {response.url}",
                status_code=response.status_code,
            ))
            return

        try:
            result = unwrap(response.json())
        except ParseError as e:
            logger.debug("Unparseable body from %s: %s", response.url, e)
            live.post_error(e)
            return
        except ValueError as e:
            logger.debug("Invalid JSON from %s: %s", response.url, e)
            error = ParseError(f"Invalid JSON ({e})")
            error.__cause__ = e
            live.post_error(error)
            return

        live.post_value(result)

    future.add_done_callback(on_done)
