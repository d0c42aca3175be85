"""Conversation model: messages, prompts, and call options."""

from .message import (
    Message,
    Role,
    assistant_message,
    system_message,
    tool_message,
    user_message,
)
from .prompt import CallOptions, Prompt, new_prompt

__all__ = [
    "Role",
    "Message",
    "user_message",
    "assistant_message",
    "system_message",
    "tool_message",
    "CallOptions",
    "Prompt",
    "new_prompt",
]
