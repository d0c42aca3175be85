"""OpenAI provider: chat adapter over the official SDK."""

from .chat_model import OpenAIChatModel

__all__ = ["OpenAIChatModel"]
