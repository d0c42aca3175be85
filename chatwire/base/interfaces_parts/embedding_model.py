"""EmbeddingModel Protocol (single-class module)."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from ...embedding.request import EmbeddingRequest
from ...embedding.response import EmbeddingResponse
from ..cancellation import CancellationToken


@runtime_checkable
class EmbeddingModel(Protocol):
    """Embedding capability: one batched call, one vector per input in order."""

    def call(
        self, request: EmbeddingRequest, *, token: Optional[CancellationToken] = None
    ) -> EmbeddingResponse:  # pragma: no cover - interface
        ...
