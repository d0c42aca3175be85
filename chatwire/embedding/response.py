"""Embedding response value types."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

Vector = Tuple[float, ...]


@dataclass(frozen=True)
class Embedding:
    """One embedding vector and the position of the input it belongs to."""

    vector: Vector
    index: int


@dataclass(frozen=True)
class EmbeddingResponse:
    """Ordered embeddings; ``embeddings[i].index == i``."""

    embeddings: Tuple[Embedding, ...] = ()

    @classmethod
    def from_vectors(cls, vectors: Sequence[Sequence[float]]) -> "EmbeddingResponse":
        """Index vectors by their position in ``vectors``."""
        return cls(
            embeddings=tuple(
                Embedding(vector=tuple(float(x) for x in vec), index=i) for i, vec in enumerate(vectors)
            )
        )

    def vectors(self) -> List[Vector]:
        return [e.vector for e in sorted(self.embeddings, key=lambda e: e.index)]

    def __len__(self) -> int:
        return len(self.embeddings)


__all__ = ["Vector", "Embedding", "EmbeddingResponse"]
