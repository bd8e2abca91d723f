from __future__ import annotations

from concurrent.futures import Executor, Future
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import requests

HEADLINES_PATH = "v2/top-headlines"
SEARCH_PATH = "v2/everything"
SOURCES_PATH = "v2/sources"


class NewsApi:
    """
    Typed interface to the three remote endpoints.

    Every call is handed to `executor` and returns a Future for the raw
    response right away. Parameters passed as None are left out of the query
    string.
    """

    def __init__(
        self,
        session: requests.Session,
        base_url: str,
        executor: Executor,
        *,
        timeout: float = 30.0,
    ) -> None:
        self.session = session
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.executor = executor
        self.timeout = timeout

    def get_headlines(self, category: str, country: str, api_key: str) -> "Future[requests.Response]":
        return self._enqueue(HEADLINES_PATH, {
            "category": category,
            "country": country,
            "apiKey": api_key,
        })

    def get_search_for_news(self, query: str, api_key: Optional[str] = None) -> "Future[requests.Response]":
        return self._enqueue(SEARCH_PATH, {"q": query, "apiKey": api_key})

    def get_sources(
        self,
        category: Optional[str],
        language: Optional[str],
        api_key: str,
        country: Optional[str],
    ) -> "Future[requests.Response]":
        return self._enqueue(SOURCES_PATH, {
            "category": category,
            "language": language,
            "apiKey": api_key,
            "country": country,
        })

    def _enqueue(self, path: str, params: Dict[str, Any]) -> "Future[requests.Response]":
        url = urljoin(self.base_url, path)
        params = {k: v for k, v in params.items() if v is not None}
        return self.executor.submit(self.session.get, url, params=params, timeout=self.timeout)
