"""Request payload construction failure."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .base_error import ChatwireError


@dataclass(eq=False)
class EncodingError(ChatwireError):
    """Raised when a provider payload cannot be built from a ``Prompt``.

    Typical triggers are provider-specific options rejected by the wire
    schema or values that cannot be serialized to JSON.
    """

    message: str
    provider: str = "unknown"
    raw: Optional[BaseException] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.provider} encoding: {self.message}"


__all__ = ["EncodingError"]
