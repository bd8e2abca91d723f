from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .exceptions import ParseError
from .models import Article, ArticleResponseWrapper, Source, SourceResponseWrapper

# Timestamp formats used by the provider, e.g. 2024-03-01T12:30:00Z
DATE_FORMATS = ("%Y-%m-%dT%H:%M:%SZ", "%Y-%m-%dT%H:%M:%S.%fZ")


def parse_date(value: Any) -> Optional[datetime]:
    """
    Convert a provider timestamp string to a timezone-aware UTC datetime.

    Missing values map to None. Anything that does not match DATE_FORMATS
    raises ParseError.
    """
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ParseError(f"Expected timestamp string, got {type(value).__name__}")
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    raise ParseError(f"Unparseable timestamp: {value!r}")


def _get_str(entry: Dict[str, Any], key: str) -> Optional[str]:
    val = entry.get(key)
    if isinstance(val, str):
        return val
    return None


def parse_article(entry: Any) -> Article:
    """Map one raw article object to an Article."""
    if not isinstance(entry, dict):
        raise ParseError(f"Article entry must be an object, got {type(entry).__name__}")

    # Nested {"id": ..., "name": ...}; either side may be null
    src = entry.get("source") or {}
    if not isinstance(src, dict):
        src = {}

    return Article(
        title=_get_str(entry, "title") or "",
        description=_get_str(entry, "description"),
        url=_get_str(entry, "url"),
        published_at=parse_date(entry.get("publishedAt")),
        category=_get_str(entry, "category"),
        author=_get_str(entry, "author"),
        url_to_image=_get_str(entry, "urlToImage"),
        content=_get_str(entry, "content"),
        source_id=_get_str(src, "id"),
        source_name=_get_str(src, "name"),
    )


def parse_source(entry: Any) -> Source:
    """Map one raw source object to a Source."""
    if not isinstance(entry, dict):
        raise ParseError(f"Source entry must be an object, got {type(entry).__name__}")
    return Source(
        id=_get_str(entry, "id"),
        name=_get_str(entry, "name") or "",
        description=_get_str(entry, "description"),
        url=_get_str(entry, "url"),
        category=_get_str(entry, "category"),
        language=_get_str(entry, "language"),
        country=_get_str(entry, "country"),
    )


def _get_list(payload: Any, key: str) -> list:
    if not isinstance(payload, dict):
        raise ParseError(f"Response body must be an object, got {type(payload).__name__}")
    items = payload.get(key)
    if not isinstance(items, list):
        raise ParseError(f"Response body has no '{key}' list")
    return items


def parse_article_response(payload: Any) -> ArticleResponseWrapper:
    """
    Parse a headlines/search response body.

    A single malformed article fails the whole response.
    """
    items = _get_list(payload, "articles")
    total = payload.get("totalResults")
    return ArticleResponseWrapper(
        status=_get_str(payload, "status") or "",
        articles=[parse_article(a) for a in items],
        total_results=total if isinstance(total, int) else None,
    )


def parse_source_response(payload: Any) -> SourceResponseWrapper:
    items = _get_list(payload, "sources")
    return SourceResponseWrapper(
        status=_get_str(payload, "status") or "",
        sources=[parse_source(s) for s in items],
    )
