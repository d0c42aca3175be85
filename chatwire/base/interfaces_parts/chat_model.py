"""ChatModel Protocol (single-class module).

Defines the chat capability shared by every provider adapter.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, runtime_checkable

from ...prompt import Prompt
from ..cancellation import CancellationToken


@runtime_checkable
class ChatModel(Protocol):
    """Chat capability: one-shot completion and callback streaming.

    Implementations encode every message of the prompt in order with its role
    string unchanged, and honor ``prompt.options.model`` for that call only.
    """

    def call(self, prompt: Prompt, *, token: Optional[CancellationToken] = None) -> str:
        """Return the text of the first completion.

        Raises:
            EncodingError: the request could not be built.
            TransportError: network failure or undecodable response.
            ProviderError: the backend reported an error.
            CancellationError: ``token`` fired.
        """
        ...

    def stream(
        self,
        prompt: Prompt,
        sink: Callable[[bytes], Any],
        *,
        token: Optional[CancellationToken] = None,
    ) -> None:
        """Deliver content deltas to ``sink`` in arrival order.

        An exception raised by ``sink`` stops the stream and propagates as-is.
        """
        ...
