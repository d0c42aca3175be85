"""Convenience facade over an embedding adapter."""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from .request import EmbeddingRequest
from .response import Vector

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..base.cancellation import CancellationToken
    from ..base.interfaces import EmbeddingModel


class Embedding:
    """Text-in, vectors-out wrapper around an ``EmbeddingModel``.

    Errors from the adapter propagate unchanged.
    """

    def __init__(self, embedding_model: "EmbeddingModel") -> None:
        self._model = embedding_model

    @property
    def model(self) -> "EmbeddingModel":
        return self._model

    def embeds(self, *texts: str, token: Optional["CancellationToken"] = None) -> List[Vector]:
        """Embed all ``texts`` in one batched call; vectors follow input order."""
        response = self._model.call(EmbeddingRequest(inputs=tuple(texts)), token=token)
        return response.vectors()

    def embed(self, text: str, *, token: Optional["CancellationToken"] = None) -> Vector:
        """Embed a single text."""
        return self.embeds(text, token=token)[0]


__all__ = ["Embedding"]
