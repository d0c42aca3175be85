"""Embedding request value types."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple


@dataclass(frozen=True)
class EmbeddingOptions:
    """Per-call embedding options.

    ``model`` overrides the adapter's default embedding model for one call;
    ``extra`` is merged into the provider payload.
    """

    model: Optional[str] = None
    extra: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        if not isinstance(self.extra, MappingProxyType):
            object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))


@dataclass(frozen=True)
class EmbeddingRequest:
    """A batch of input texts to embed in one call."""

    inputs: Tuple[str, ...] = ()
    options: EmbeddingOptions = field(default_factory=EmbeddingOptions)

    def __post_init__(self) -> None:
        if not isinstance(self.inputs, tuple):
            object.__setattr__(self, "inputs", tuple(self.inputs))


__all__ = ["EmbeddingOptions", "EmbeddingRequest"]
