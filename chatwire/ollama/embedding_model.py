"""Ollama embedding adapter.

One ``/api/embed`` call carries every input of the request. Ollama returns
vectors as a bare list without per-item indices, so each vector is assigned the
index of its position; the adapter relies on the daemon preserving input order
and refuses a reply whose vector count differs from the input count.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import ValidationError

from ..base.cancellation import CancellationToken
from ..base.errors import EncodingError, ErrorCode, ProviderError
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..embedding.request import EmbeddingRequest
from ..embedding.response import EmbeddingResponse
from .client import PROVIDER_NAME, OllamaClient
from .wire import EmbedRequest


def build_embed_request(request: EmbeddingRequest, default_model: str) -> EmbedRequest:
    model = request.options.model or default_model
    try:
        fields: Dict[str, Any] = dict(request.options.extra)
        fields.update(model=model, input=list(request.inputs))
        return EmbedRequest(**fields)
    except (ValidationError, TypeError) as e:
        raise EncodingError(message=f"build embed request: {e}", provider=PROVIDER_NAME, raw=e) from e


class OllamaEmbeddingModel:
    """Embedding adapter for a single Ollama embedding model."""

    def __init__(self, client: OllamaClient, model: str) -> None:
        self._client = client
        self._model = model
        self._logger = get_logger("providers.ollama")

    @property
    def provider_name(self) -> str:
        return PROVIDER_NAME

    @property
    def model(self) -> str:
        return self._model

    def call(self, request: EmbeddingRequest, *, token: Optional[CancellationToken] = None) -> EmbeddingResponse:
        """Embed all inputs in one call; ``embeddings[i]`` belongs to ``inputs[i]``.

        Raises:
            ProviderError: code ``validation`` when the number of returned
                vectors differs from the number of inputs; otherwise whatever
                the backend reports.
        """
        wire = build_embed_request(request, self._model)
        ctx = LogContext(provider=PROVIDER_NAME, model=wire.model)
        normalized_log_event(self._logger, "embed.start", ctx, phase="start", inputs=len(request.inputs))
        reply = self._client.embed(wire, token=token)
        if len(reply.embeddings) != len(request.inputs):
            raise ProviderError(
                code=ErrorCode.VALIDATION,
                message=f"expected {len(request.inputs)} embeddings, got {len(reply.embeddings)}",
                provider=PROVIDER_NAME,
                model=wire.model,
            )
        response = EmbeddingResponse.from_vectors(reply.embeddings)
        normalized_log_event(self._logger, "embed.end", ctx, phase="finalize", emitted=len(response))
        return response


__all__ = ["OllamaEmbeddingModel", "build_embed_request"]
