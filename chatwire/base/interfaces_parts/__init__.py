"""Capability Protocols, one per module.

Re-exported through ``chatwire.base.interfaces``.
"""

from .chat_model import ChatModel
from .embedding_model import EmbeddingModel

__all__ = ["ChatModel", "EmbeddingModel"]
