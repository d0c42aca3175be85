"""
Transport-level failure type.

Covers network/connection failures, malformed HTTP responses, undecodable
stream frames, and failure to decode an error envelope itself. When the HTTP
status is known it is preserved on the exception so callers never lose it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .base_error import ChatwireError


@dataclass(eq=False)
class TransportError(ChatwireError):
    """Network or wire-format failure below the provider protocol.

    Attributes:
        message: Description of the failure.
        provider: Provider key for the client that issued the request.
        status_code: HTTP status code when a response was received.
        raw: Underlying exception (``httpx`` error, decode error, ...).
    """

    message: str
    provider: str = "unknown"
    status_code: Optional[int] = None
    raw: Optional[BaseException] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.provider} transport: {self.message}"


__all__ = ["TransportError"]
