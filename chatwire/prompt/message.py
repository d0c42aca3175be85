"""
Message value type used across providers.

Defines the `Role` enumeration and the immutable `Message` dataclass plus one
constructor helper per role. Construction never validates or fails; adapters
decide what they can encode.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional


class Role(str, Enum):
    """Author of a conversation turn; the value is the exact wire role string."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"
    TOOL = "tool"

    def __str__(self) -> str:
        return self.value


def _freeze(metadata: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    return MappingProxyType(dict(metadata or {}))


@dataclass(frozen=True)
class Message:
    """A single conversation turn.

    Attributes:
        role: The role of the message author.
        text: Message content.
        metadata: Read-only mapping of auxiliary data; copied at construction
            so later changes to the caller's dict are not observed.
    """

    role: Role
    text: str
    metadata: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        if not isinstance(self.metadata, MappingProxyType):
            object.__setattr__(self, "metadata", _freeze(self.metadata))


def user_message(text: str, *, metadata: Optional[Mapping[str, Any]] = None) -> Message:
    """A message of the type 'user'."""
    return Message(Role.USER, text, _freeze(metadata))


def assistant_message(text: str, *, metadata: Optional[Mapping[str, Any]] = None) -> Message:
    """A message of the type 'assistant'."""
    return Message(Role.ASSISTANT, text, _freeze(metadata))


def system_message(text: str, *, metadata: Optional[Mapping[str, Any]] = None) -> Message:
    """A message of the type 'system'."""
    return Message(Role.SYSTEM, text, _freeze(metadata))


def tool_message(text: str, *, metadata: Optional[Mapping[str, Any]] = None) -> Message:
    """A message of the type 'tool'."""
    return Message(Role.TOOL, text, _freeze(metadata))


__all__ = [
    "Role",
    "Message",
    "user_message",
    "assistant_message",
    "system_message",
    "tool_message",
]
