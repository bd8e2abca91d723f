from __future__ import annotations

import json
import socket
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Dict, List, Tuple
from urllib.parse import parse_qs, urlsplit

import pytest

from news_client import AppContext, ClientSettings, NewsApiClient


ARTICLES_BODY = {
    "status": "ok",
    "totalResults": 2,
    "articles": [
        {
            "source": {"id": "the-verge", "name": "The Verge"},
            "author": "Jane Doe",
            "title": "Chip makers report record quarter",
            "description": "Demand keeps climbing.",
            "url": "https://example.com/chips",
            "urlToImage": "https://example.com/chips.jpg",
            "publishedAt": "2024-03-01T12:30:00Z",
            "content": "Full text...",
        },
        {
            "source": {"id": None, "name": "Example Daily"},
            "author": None,
            "title": "New phone announced",
            "description": None,
            "url": "https://example.com/phone",
            "urlToImage": None,
            "publishedAt": "2024-03-01T14:05:10Z",
            "content": None,
        },
    ],
}

SOURCES_BODY = {
    "status": "ok",
    "sources": [
        {"id": "a", "name": "Alpha News", "category": "general", "language": "en", "country": "us"},
        {"id": "b", "name": "Beta Wire", "category": "general", "language": "en", "country": "gb"},
    ],
}


class StubApi:
    """Local stand-in for the remote API that records every request it receives."""

    def __init__(self) -> None:
        self.routes: Dict[str, Tuple[int, bytes]] = {}
        self.requests: List[Tuple[str, Dict[str, List[str]]]] = []
        self.base_url = ""

    def respond(self, path: str, body: Any, status: int = 200) -> None:
        payload = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")
        self.routes[path] = (status, payload)

    def hits(self, path: str) -> int:
        return sum(1 for p, _ in self.requests if p == path)

    def last_query(self, path: str) -> Dict[str, List[str]]:
        return [q for p, q in self.requests if p == path][-1]


def _make_handler(stub: StubApi):
    class Handler(BaseHTTPRequestHandler):
        def do_GET(self):
            parsed = urlsplit(self.path)
            stub.requests.append((parsed.path, parse_qs(parsed.query)))
            status, payload = stub.routes.get(parsed.path, (404, b'{"status": "error"}'))
            self.send_response(status)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(payload)))
            # Headers the client is expected to override
            self.send_header("Pragma", "no-cache")
            self.send_header("Cache-Control", "no-cache, no-store")
            self.end_headers()
            self.wfile.write(payload)

        def log_message(self, format, *args):
            pass

    return Handler


@pytest.fixture
def stub_api():
    stub = StubApi()
    server = ThreadingHTTPServer(("127.0.0.1", 0), _make_handler(stub))
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    stub.base_url = f"http://127.0.0.1:{server.server_address[1]}/"
    yield stub
    server.shutdown()
    server.server_close()


@pytest.fixture(autouse=True)
def reset_client():
    NewsApiClient._reset_instance()
    yield
    NewsApiClient._reset_instance()


@pytest.fixture
def make_context(tmp_path):
    def _make(base_url: str, **overrides) -> AppContext:
        settings = ClientSettings(base_url=base_url, api_key="search-key", timeout=5.0, **overrides)
        return AppContext(cache_dir=tmp_path / "cache", settings=settings)

    return _make


@pytest.fixture
def unused_url():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        port = s.getsockname()[1]
    return f"http://127.0.0.1:{port}/"
