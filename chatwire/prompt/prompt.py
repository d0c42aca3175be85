"""
Prompt value type: an ordered conversation plus per-call options.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

from .message import Message


@dataclass(frozen=True)
class CallOptions:
    """Per-call options.

    Attributes:
        model: Model override for this call only; when set it supersedes the
            adapter's configured default. The adapter itself is not changed.
        extra: Provider-specific key/value bag merged into the request
            payload (e.g. ``{"options": {"temperature": 0}}`` for Ollama,
            ``{"temperature": 0}`` for OpenAI).
    """

    model: Optional[str] = None
    extra: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        if not isinstance(self.extra, MappingProxyType):
            object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))


@dataclass(frozen=True)
class Prompt:
    """An ordered sequence of messages with call options.

    Message order is conversation order; adapters encode it verbatim.
    """

    messages: Tuple[Message, ...] = ()
    options: CallOptions = field(default_factory=CallOptions)

    def __post_init__(self) -> None:
        if not isinstance(self.messages, tuple):
            object.__setattr__(self, "messages", tuple(self.messages))


def new_prompt(*messages: Message, options: Optional[CallOptions] = None) -> Prompt:
    """Build a `Prompt` from messages as given (no validation)."""
    return Prompt(messages=tuple(messages), options=options or CallOptions())


__all__ = ["CallOptions", "Prompt", "new_prompt"]
