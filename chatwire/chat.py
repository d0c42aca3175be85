"""Convenience facade over a chat adapter."""
from __future__ import annotations

from typing import Any, Callable, Optional

from .base.cancellation import CancellationToken
from .base.interfaces import ChatModel
from .prompt import Prompt, new_prompt, user_message


class Chat:
    """Text-in, text-out wrapper around a ``ChatModel``.

    ``chat`` and ``chat_stream`` build a single user turn from ``text``;
    ``prompt`` and ``stream`` pass a full :class:`Prompt` through. Errors from
    the adapter propagate unchanged.
    """

    def __init__(self, chat_model: ChatModel) -> None:
        self._model = chat_model

    @property
    def model(self) -> ChatModel:
        return self._model

    def chat(self, text: str, *, token: Optional[CancellationToken] = None) -> str:
        return self._model.call(new_prompt(user_message(text)), token=token)

    def chat_stream(
        self,
        text: str,
        sink: Callable[[bytes], Any],
        *,
        token: Optional[CancellationToken] = None,
    ) -> None:
        self._model.stream(new_prompt(user_message(text)), sink, token=token)

    def prompt(self, prompt: Prompt, *, token: Optional[CancellationToken] = None) -> str:
        return self._model.call(prompt, token=token)

    def stream(
        self,
        prompt: Prompt,
        sink: Callable[[bytes], Any],
        *,
        token: Optional[CancellationToken] = None,
    ) -> None:
        self._model.stream(prompt, sink, token=token)


__all__ = ["Chat"]
