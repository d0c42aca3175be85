"""Typed client for the Ollama HTTP API.

Purpose:
    Thin, typed wrapper over :class:`~chatwire.base.http.HttpTransport` for the
    local Ollama daemon (default ``http://localhost:11434``). Adapters build
    wire requests and call one method per endpoint.

External dependencies:
    - ``httpx`` (through the transport). No SDK or API key is required since
      Ollama is a local daemon.

Error handling:
    Everything raised by the transport propagates unchanged: ``ProviderError``
    for backend-reported failures, ``TransportError`` for network or decode
    failures, ``EncodingError`` for unserializable payloads and
    ``CancellationError`` when the token fires.
"""

from __future__ import annotations

from typing import Optional

import httpx

from ..base.cancellation import CancellationToken
from ..base.http import HttpTransport, Sink
from ..config import get_provider_config
from ..config.defaults import OLLAMA_DEFAULT_HOST
from .wire import (
    ChatRequest,
    ChatResponse,
    EmbeddingRequest,
    EmbeddingResponse,
    EmbedRequest,
    EmbedResponse,
)

PROVIDER_NAME = "ollama"


class OllamaClient:
    """Connection to one Ollama daemon, shared across adapters and threads.

    Parameters:
        base_url: Daemon root URL.
        http_client: Optional caller-owned ``httpx.Client``; when omitted the
            shared pooled client for ``base_url`` is used.
    """

    def __init__(self, base_url: str = OLLAMA_DEFAULT_HOST, http_client: Optional[httpx.Client] = None) -> None:
        self._transport = HttpTransport(base_url, http_client=http_client, provider=PROVIDER_NAME)

    @classmethod
    def from_config(cls, host: Optional[str] = None, *, http_client: Optional[httpx.Client] = None) -> "OllamaClient":
        """Build a client whose host comes from ``host`` or the layered config."""
        cfg = get_provider_config(PROVIDER_NAME, overrides={"host": host})
        resolved = str(cfg.get("host") or "").strip() or OLLAMA_DEFAULT_HOST
        return cls(resolved, http_client=http_client)

    @property
    def base_url(self) -> str:
        return self._transport.base_url

    @property
    def transport(self) -> HttpTransport:
        return self._transport

    def chat(self, request: ChatRequest, *, token: Optional[CancellationToken] = None) -> ChatResponse:
        """Non-streaming ``/api/chat``; ``request.stream`` is forced to False."""
        body = request.model_copy(update={"stream": False})
        return self._transport.post("/api/chat", body, ChatResponse, token=token, model=request.model)

    def chat_stream(
        self,
        request: ChatRequest,
        sink: Sink,
        *,
        token: Optional[CancellationToken] = None,
    ) -> int:
        """Streaming ``/api/chat``; ``sink`` receives each raw NDJSON frame.

        Returns the number of frames delivered.
        """
        body = request.model_copy(update={"stream": True})
        return self._transport.stream("/api/chat", body, sink, token=token, model=request.model)

    def embed(self, request: EmbedRequest, *, token: Optional[CancellationToken] = None) -> EmbedResponse:
        """Batched ``/api/embed``."""
        return self._transport.post("/api/embed", request, EmbedResponse, token=token, model=request.model)

    def embeddings(
        self, request: EmbeddingRequest, *, token: Optional[CancellationToken] = None
    ) -> EmbeddingResponse:
        """Legacy single-prompt ``/api/embeddings``."""
        return self._transport.post("/api/embeddings", request, EmbeddingResponse, token=token, model=request.model)


__all__ = ["OllamaClient", "PROVIDER_NAME"]
