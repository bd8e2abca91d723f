from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, Union

from .config import ClientSettings

if TYPE_CHECKING:
    from .core import NewsApiClient


class RuntimeContext(Protocol):
    """Anything that can tell the client where to keep its HTTP cache."""

    cache_dir: Union[str, Path]


@dataclass
class AppContext:
    """
    Application-level context handed to the parts of an app that fetch news.

    Holds the writable cache directory and the client settings, and gives
    access to the shared client without reaching for module globals.
    """
    cache_dir: Path
    settings: ClientSettings = field(default_factory=ClientSettings)

    @property
    def news_client(self) -> "NewsApiClient":
        from .core import NewsApiClient

        return NewsApiClient.get_instance(self)
