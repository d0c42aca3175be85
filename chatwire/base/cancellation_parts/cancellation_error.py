"""Cancellation error type.

Defines the public ``CancellationError`` raised when a caller's
``CancellationToken`` fires before an operation completes.
"""

from __future__ import annotations

from ..errors_parts.base_error import ChatwireError


class CancellationError(ChatwireError):
    """Raised when an operation observes a cancellation request.

    Distinguishes cooperative cancellation from other failures so callers can
    handle it separately (e.g., suppress log noise or skip error reporting).
    """

    def __init__(self, reason: str = "operation cancelled") -> None:
        super().__init__(reason)
        self.reason = reason


__all__ = ["CancellationError"]
