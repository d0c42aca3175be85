"""Ollama chat adapter.

Purpose:
    Translate a provider-agnostic :class:`~chatwire.prompt.Prompt` into an
    Ollama ``/api/chat`` request, then either return the reply text (``call``)
    or forward each raw streamed frame to a sink (``stream``).

Request construction:
    - One ``{role, content}`` pair per message, in prompt order, with the role
      string unchanged.
    - ``prompt.options.model`` overrides the adapter's model for that call.
    - ``prompt.options.extra`` is merged into the request body (e.g.
      ``options``, ``format``, ``keep_alive``, ``tools``). Unknown keys are
      rejected by the wire schema and surface as ``EncodingError``.
    - A message whose metadata carries ``images`` (a base64 string or a list
      of them) forwards them on the wire message.

Streaming:
    The sink receives the raw bytes of every NDJSON frame, unchanged and in
    order, the terminal ``done`` frame included. Error frames never reach the
    sink; they fail the call with ``ProviderError``.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError

from ..base.cancellation import CancellationToken
from ..base.errors import EncodingError
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..prompt import Prompt
from .client import PROVIDER_NAME, OllamaClient
from .wire import ChatRequest, OllamaMessage


def build_chat_request(prompt: Prompt, default_model: str) -> ChatRequest:
    """Encode ``prompt`` as an Ollama ``ChatRequest``.

    Raises:
        EncodingError: ``extra`` holds keys or values the wire schema rejects.
    """
    model = prompt.options.model or default_model
    try:
        messages: List[OllamaMessage] = []
        for m in prompt.messages:
            images = m.metadata.get("images")
            if isinstance(images, (str, bytes)):
                images = [images]
            messages.append(
                OllamaMessage(
                    role=m.role.value,
                    content=m.text,
                    images=list(images) if images else None,
                )
            )
        fields: Dict[str, Any] = dict(prompt.options.extra)
        fields.update(model=model, messages=messages)
        return ChatRequest(**fields)
    except (ValidationError, TypeError) as e:
        raise EncodingError(message=f"build chat request: {e}", provider=PROVIDER_NAME, raw=e) from e


class OllamaChatModel:
    """Chat adapter for a single Ollama model.

    Holds only the injected client and the default model name; it is never
    mutated by a call, so one instance can serve concurrent callers.
    """

    def __init__(self, client: OllamaClient, model: str) -> None:
        self._client = client
        self._model = model
        self._logger = get_logger("providers.ollama")

    @property
    def provider_name(self) -> str:
        return PROVIDER_NAME

    @property
    def model(self) -> str:
        return self._model

    def call(self, prompt: Prompt, *, token: Optional[CancellationToken] = None) -> str:
        """Return ``message.content`` of the non-streaming reply."""
        request = build_chat_request(prompt, self._model)
        ctx = LogContext(provider=PROVIDER_NAME, model=request.model)
        normalized_log_event(self._logger, "chat.start", ctx, phase="start", messages=len(request.messages))
        response = self._client.chat(request, token=token)
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx,
            phase="finalize",
            emitted=True,
            done_reason=response.done_reason,
            eval_count=response.eval_count,
        )
        return response.message.content

    def stream(
        self,
        prompt: Prompt,
        sink: Callable[[bytes], Any],
        *,
        token: Optional[CancellationToken] = None,
    ) -> None:
        """Forward every raw NDJSON frame to ``sink`` in arrival order.

        Each frame is one ``ChatResponse`` object as sent by the daemon, the
        terminal ``done`` frame included; decode it with
        ``ChatResponse.model_validate_json`` to read ``message.content``.
        """
        request = build_chat_request(prompt, self._model)
        ctx = LogContext(provider=PROVIDER_NAME, model=request.model)
        normalized_log_event(self._logger, "stream.start", ctx, phase="start", messages=len(request.messages))
        emitted = self._client.chat_stream(request, sink, token=token)
        normalized_log_event(self._logger, "stream.end", ctx, phase="finalize", emitted=emitted)


__all__ = ["OllamaChatModel", "build_chat_request"]
