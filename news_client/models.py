from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass(frozen=True)
class Specification:
    """Query parameters for one headlines or sources request."""
    category: str
    country: str
    api_key: str


@dataclass(frozen=True)
class Article:
    """
    A single article as returned by the API.

    `category` is not sent by the API for headlines; the client back-fills it
    from the request's Specification by building a new Article.
    """
    title: str
    description: Optional[str] = None
    url: Optional[str] = None
    published_at: Optional[datetime] = None
    category: Optional[str] = None
    author: Optional[str] = None
    url_to_image: Optional[str] = None
    content: Optional[str] = None
    source_id: Optional[str] = None
    source_name: Optional[str] = None


@dataclass(frozen=True)
class Source:
    id: Optional[str]
    name: str
    description: Optional[str] = None
    url: Optional[str] = None
    category: Optional[str] = None
    language: Optional[str] = None
    country: Optional[str] = None


@dataclass(frozen=True)
class ArticleResponseWrapper:
    status: str
    articles: List[Article] = field(default_factory=list)
    total_results: Optional[int] = None


@dataclass(frozen=True)
class SourceResponseWrapper:
    status: str
    sources: List[Source] = field(default_factory=list)
