"""Pytest configuration for the chatwire test suite.

Network access is replaced by ``httpx.MockTransport`` handlers. Fixtures build
transports and clients around a handler so tests only describe responses.
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, List

import httpx
import pytest

from chatwire.base.http import HttpTransport, close_all_clients
from chatwire.ollama.client import OllamaClient

BASE_URL = "http://ollama.test:11434"

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture()
def make_transport() -> Iterator[Callable[..., HttpTransport]]:
    """Build an ``HttpTransport`` over a mock handler."""
    clients: List[httpx.Client] = []

    def _make(handler: Handler, **kwargs: Any) -> HttpTransport:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return HttpTransport(BASE_URL, http_client=client, provider="ollama", **kwargs)

    yield _make
    for c in clients:
        c.close()


@pytest.fixture()
def make_ollama_client() -> Iterator[Callable[[Handler], OllamaClient]]:
    """Build an ``OllamaClient`` over a mock handler."""
    clients: List[httpx.Client] = []

    def _make(handler: Handler) -> OllamaClient:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return OllamaClient(BASE_URL, http_client=client)

    yield _make
    for c in clients:
        c.close()


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host configuration from leaking into tests."""
    for name in (
        "CHATWIRE_CONFIG_FILE",
        "CHATWIRE_LOG_LEVEL",
        "CHATWIRE_CONNECT_TIMEOUT_SECONDS",
        "CHATWIRE_READ_TIMEOUT_SECONDS",
        "OLLAMA_HOST",
        "OLLAMA_MODEL",
        "OLLAMA_EMBED_MODEL",
        "OPENAI_API_KEY",
        "OPENAI_BASE_URL",
        "OPENAI_MODEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(scope="session", autouse=True)
def _close_pooled_clients() -> Iterator[None]:
    yield
    close_all_clients()
