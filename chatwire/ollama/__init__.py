"""Ollama provider: HTTP client, wire schemas, chat and embedding adapters."""

from .chat_model import OllamaChatModel
from .client import OllamaClient
from .embedding_model import OllamaEmbeddingModel

__all__ = ["OllamaClient", "OllamaChatModel", "OllamaEmbeddingModel"]
