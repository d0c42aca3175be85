"""chatwire package

Provider-agnostic chat and embedding calls over multiple LLM backends.

Public API (re-exported):
    - Version: ``__version__``
    - Conversation model: :class:`Prompt`, :class:`Message`, :class:`Role`,
      :class:`CallOptions`, :func:`new_prompt` and the per-role helpers
    - Embedding model: :class:`EmbeddingRequest`, :class:`EmbeddingResponse`,
      :class:`EmbeddingOptions`
    - Facades: :class:`Chat`, :class:`Embedding`
    - Errors: :class:`ChatwireError` and its subclasses, :class:`ErrorCode`
    - Cancellation: :class:`CancellationToken`
    - Factory: :func:`create_chat_model`, :func:`create_embedding_model`

Adapters live in ``chatwire.ollama`` and ``chatwire.openai`` and are imported
on demand (directly or through the factory).
"""

from .base.cancellation import CancellationError, CancellationToken
from .base.constants import VERSION
from .base.errors import (
    ChatwireError,
    EncodingError,
    ErrorCode,
    ProviderError,
    SinkError,
    TransportError,
)
from .base.factory import UnknownProviderError, create_chat_model, create_embedding_model
from .base.interfaces import ChatModel, EmbeddingModel
from .chat import Chat
from .embedding import Embedding, EmbeddingOptions, EmbeddingRequest, EmbeddingResponse
from .prompt import (
    CallOptions,
    Message,
    Prompt,
    Role,
    assistant_message,
    new_prompt,
    system_message,
    tool_message,
    user_message,
)

__version__ = VERSION

__all__ = [
    "__version__",
    "Role",
    "Message",
    "CallOptions",
    "Prompt",
    "new_prompt",
    "user_message",
    "assistant_message",
    "system_message",
    "tool_message",
    "EmbeddingOptions",
    "EmbeddingRequest",
    "EmbeddingResponse",
    "Chat",
    "Embedding",
    "ChatModel",
    "EmbeddingModel",
    "ChatwireError",
    "EncodingError",
    "TransportError",
    "ProviderError",
    "CancellationError",
    "SinkError",
    "ErrorCode",
    "CancellationToken",
    "UnknownProviderError",
    "create_chat_model",
    "create_embedding_model",
]
