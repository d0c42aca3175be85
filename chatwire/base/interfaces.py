"""
Provider-agnostic capability interfaces.

Re-exports the Protocols kept one-per-module under
``chatwire.base.interfaces_parts`` so upstream imports stay stable.
"""

from __future__ import annotations

from .interfaces_parts import ChatModel, EmbeddingModel

__all__ = ["ChatModel", "EmbeddingModel"]
