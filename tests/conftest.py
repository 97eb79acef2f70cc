"""
Shared fixtures.

HTTP traffic never leaves the process: ``FakeDeepLServer`` plugs into the
client through ``httpx.MockTransport`` and records every request.
"""

from __future__ import annotations

from typing import Any, Callable
from urllib.parse import parse_qs

import httpx
import pytest

from deepl_api.client import DeepL
from deepl_api.config import get_settings


FREE_KEY = "0123abcd-0000-0000-0000-000000000000:fx"
PRO_KEY = "0123abcd-0000-0000-0000-000000000000"


class FakeDeepLServer:
    """Canned responses keyed by (method, endpoint)."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}

    def add(
        self,
        method: str,
        endpoint: str,
        status_code: int = 200,
        json: Any = None,
        headers: dict[str, str] | None = None,
        text: str | None = None,
    ) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            if text is not None:
                return httpx.Response(status_code, text=text, headers=headers)
            return httpx.Response(status_code, json=json, headers=headers)

        self._routes[(method.upper(), endpoint)] = respond

    def add_handler(self, method: str, endpoint: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self._routes[(method.upper(), endpoint)] = handler

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for (method, endpoint), respond in self._routes.items():
            if request.method == method and request.url.path.endswith(endpoint):
                return respond(request)
        return httpx.Response(404, json={"message": "Not found"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


def form_params(request: httpx.Request) -> dict[str, list[str]]:
    """Decode the parameters of a recorded request (query or form body)."""
    if request.method == "GET":
        return parse_qs(request.url.query.decode(), keep_blank_values=True)
    return parse_qs(request.content.decode(), keep_blank_values=True)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate tests from the caller's DEEPL_* environment."""
    for name in ("DEEPL_API_KEY", "DEEPL_SERVER_URL", "DEEPL_TIMEOUT", "DEEPL_CONNECT_TIMEOUT", "DEEPL_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def server():
    """Fresh fake DeepL server."""
    return FakeDeepLServer()


@pytest.fixture
def deepl(server):
    """Free-tier client wired to the fake server."""
    return DeepL(FREE_KEY, transport=server.transport)
