"""
chatwire base package

Provider-agnostic building blocks shared by every adapter:

- Interfaces: ``ChatModel`` and ``EmbeddingModel`` capability Protocols
- Errors: the ``ChatwireError`` taxonomy and ``ErrorCode`` classification
- Cancellation: ``CancellationToken`` accepted by every call
- HTTP: pooled ``httpx`` clients and the NDJSON streaming transport
- Factory: lazy creation of adapters by canonical provider name
"""

from .cancellation import CancellationError, CancellationToken
from .errors import (
    ChatwireError,
    EncodingError,
    ErrorCode,
    ProviderError,
    SinkError,
    TransportError,
    classify_status,
)
from .factory import ProviderFactory, UnknownProviderError, create_chat_model, create_embedding_model
from .http import FrameReader, HttpTransport, close_all_clients, get_httpx_client
from .interfaces import ChatModel, EmbeddingModel
from .logging import configure_logger, get_logger
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    "CancellationToken",
    "CancellationError",
    "ChatwireError",
    "EncodingError",
    "ErrorCode",
    "ProviderError",
    "SinkError",
    "TransportError",
    "classify_status",
    "ProviderFactory",
    "UnknownProviderError",
    "create_chat_model",
    "create_embedding_model",
    "FrameReader",
    "HttpTransport",
    "get_httpx_client",
    "close_all_clients",
    "ChatModel",
    "EmbeddingModel",
    "get_logger",
    "configure_logger",
    "TimeoutConfig",
    "get_timeout_config",
]
