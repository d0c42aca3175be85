"""Root exception type for the chatwire error taxonomy."""

from __future__ import annotations


class ChatwireError(Exception):
    """Base class for every error raised by chatwire transports and adapters.

    Callers that do not care about the failure category can catch this single
    type; the subclasses carry the category-specific details.
    """


__all__ = ["ChatwireError"]
