"""
Structured provider error exception type.

Raised when the backend explicitly reports a failure, either through an
in-band ``error`` field or through an HTTP error status whose body could be
decoded. Carries a normalized `ErrorCode` for consistent handling.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .base_error import ChatwireError
from .error_code import ErrorCode


@dataclass(eq=False)
class ProviderError(ChatwireError):
    """Represents a backend-reported error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message as reported by the backend,
            prefixed with the HTTP status line when one applies.
        provider: Provider key where the error originated (e.g., ``"ollama"``).
        model: Optional model name associated with the failure.
        status_code: HTTP status code of the response, when known.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    status_code: Optional[int] = None
    raw: Optional[BaseException] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


__all__ = ["ProviderError"]
