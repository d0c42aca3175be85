"""Sink-originated stream termination."""

from __future__ import annotations

from .base_error import ChatwireError


class SinkError(ChatwireError):
    """Convenience exception a stream sink may raise to stop a stream early.

    Transports never wrap sink exceptions: whatever a sink raises, including
    this type, propagates to the caller as the very same object.
    """


__all__ = ["SinkError"]
