"""Embedding model: requests, responses, and the ``Embedding`` facade."""

from .request import EmbeddingOptions, EmbeddingRequest
from .response import Embedding as EmbeddingVector
from .response import EmbeddingResponse, Vector
from .facade import Embedding

__all__ = [
    "EmbeddingOptions",
    "EmbeddingRequest",
    "EmbeddingResponse",
    "EmbeddingVector",
    "Vector",
    "Embedding",
]
