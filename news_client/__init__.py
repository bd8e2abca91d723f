"""
news_client

A small client for a news aggregation API (newsapi.org style) that fetches
headlines, search results and source listings.

Core ideas:
- One shared HTTP client per process, with a 5 MiB disk cache whose entries
  are treated as fresh for one hour regardless of the server's headers
- Every request returns immediately with a LiveValue that a worker thread
  fills in later
- Failed requests publish nothing; the reason is on the LiveValue's error channel

Example
-------
from pathlib import Path
from news_client import AppContext, Specification

context = AppContext(cache_dir=Path.home() / ".cache" / "news")
client = context.news_client

headlines = client.get_headlines(Specification(category="technology", country="us", api_key="..."))
headlines.observe(lambda articles: print(len(articles), "articles"))
"""
from .config import ClientSettings
from .context import AppContext, RuntimeContext
from .core import NewsApiClient
from .exceptions import (
    CacheUnavailableError,
    EmptyBodyError,
    FetchError,
    NewsApiError,
    ParseError,
)
from .models import Article, Source, Specification
from .observable import LiveValue

__all__ = [
    "AppContext",
    "Article",
    "CacheUnavailableError",
    "ClientSettings",
    "EmptyBodyError",
    "FetchError",
    "LiveValue",
    "NewsApiClient",
    "NewsApiError",
    "ParseError",
    "RuntimeContext",
    "Source",
    "Specification",
]
