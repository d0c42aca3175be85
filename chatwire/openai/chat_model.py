"""OpenAI chat adapter built on the official ``openai`` SDK.

Purpose:
    Translate a :class:`~chatwire.prompt.Prompt` into a chat completions call.
    The SDK owns the wire protocol (HTTPS + server-sent events); this module
    only shapes parameters, extracts text, and maps SDK failures onto the
    chatwire error taxonomy.

Parameters:
    - One ``{"role", "content"}`` dict per message, in prompt order. Message
      metadata ``name`` and ``tool_call_id`` are forwarded when present.
    - ``prompt.options.model`` overrides the adapter's model for that call.
    - ``prompt.options.extra`` is merged into the ``create`` keyword arguments
      (``temperature``, ``max_tokens``, ``response_format``...). Keywords the
      SDK does not accept surface as ``EncodingError``.

Error mapping:
    - ``openai.APIStatusError`` -> ``ProviderError`` (code from the status).
    - ``openai.APIConnectionError`` / ``APIResponseValidationError`` and raw
      ``httpx`` read failures -> ``TransportError``.
    - Any other ``openai.APIError`` (e.g. an error event inside the stream)
      -> ``ProviderError`` with code ``unknown``.
    - Any failure observed after the token fired -> ``CancellationError``.

Cancellation:
    ``create`` runs through ``run_cancellable``, so a token firing while the
    SDK waits for its reply returns at once; streams are also closed from the
    cancelling thread.

Retries are not performed here; build the SDK client with ``max_retries=0``
when a single attempt per call is wanted (the factory does).
"""

from __future__ import annotations

from functools import partial
from typing import Any, Callable, Dict, List, Optional

import httpx
import openai

from ..base.cancellation import CancellationError, CancellationToken, run_cancellable
from ..base.errors import (
    ChatwireError,
    EncodingError,
    ErrorCode,
    ProviderError,
    TransportError,
    classify_status,
)
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..prompt import Prompt

PROVIDER_NAME = "openai"

_FORWARDED_METADATA = ("name", "tool_call_id")
_STREAM_ERRORS = (openai.OpenAIError, httpx.HTTPError, httpx.StreamError)


def build_messages(prompt: Prompt) -> List[Dict[str, Any]]:
    """Return OpenAI-style message dicts for ``prompt`` in order."""
    messages: List[Dict[str, Any]] = []
    for m in prompt.messages:
        item: Dict[str, Any] = {"role": m.role.value, "content": m.text}
        for key in _FORWARDED_METADATA:
            if m.metadata.get(key) is not None:
                item[key] = m.metadata[key]
        messages.append(item)
    return messages


def build_chat_params(prompt: Prompt, default_model: str, *, stream: bool) -> Dict[str, Any]:
    """Assemble keyword arguments for ``client.chat.completions.create``."""
    params: Dict[str, Any] = dict(prompt.options.extra)
    params["model"] = prompt.options.model or default_model
    params["messages"] = build_messages(prompt)
    if stream:
        params["stream"] = True
    else:
        params.pop("stream", None)
    return params


def map_sdk_error(
    exc: BaseException,
    *,
    model: Optional[str],
    token: Optional[CancellationToken] = None,
) -> ChatwireError:
    """Translate an SDK or ``httpx`` exception into a chatwire error."""
    if token is not None and token.cancelled:
        return CancellationError(token.reason or "operation cancelled")
    if isinstance(exc, openai.APIStatusError):
        return ProviderError(
            code=classify_status(exc.status_code),
            message=f"http status code: {exc.status_code}, {exc.message}",
            provider=PROVIDER_NAME,
            model=model,
            status_code=exc.status_code,
            raw=exc,
        )
    if isinstance(exc, openai.APIResponseValidationError):
        return TransportError(
            message=f"decode: {exc.message}",
            provider=PROVIDER_NAME,
            status_code=exc.status_code,
            raw=exc,
        )
    if isinstance(exc, openai.APIConnectionError):
        return TransportError(message=f"send: {exc.message}", provider=PROVIDER_NAME, raw=exc)
    if isinstance(exc, openai.APIError):
        return ProviderError(code=ErrorCode.UNKNOWN, message=exc.message, provider=PROVIDER_NAME, model=model, raw=exc)
    return TransportError(message=f"read: {exc}", provider=PROVIDER_NAME, raw=exc)


def _delta_text(chunk: Any) -> Optional[str]:
    """Return ``choices[0].delta.content`` (``""`` when empty), or ``None`` without choices."""
    choices = getattr(chunk, "choices", None)
    if not choices:
        return None
    delta = getattr(choices[0], "delta", None)
    return getattr(delta, "content", None) or ""


def _release(result: Any) -> None:
    """Close an abandoned SDK stream; plain completions hold no connection."""
    close = getattr(result, "close", None)
    if callable(close):
        close()


class OpenAIChatModel:
    """Chat adapter over an injected ``openai.OpenAI`` client.

    The client is shared read-only; the adapter keeps no per-call state.
    """

    def __init__(self, client: openai.OpenAI, model: str) -> None:
        self._client = client
        self._model = model
        self._logger = get_logger("providers.openai")

    @property
    def provider_name(self) -> str:
        return PROVIDER_NAME

    @property
    def model(self) -> str:
        return self._model

    def call(self, prompt: Prompt, *, token: Optional[CancellationToken] = None) -> str:
        """Return the text of the first choice of a non-streaming completion."""
        params = build_chat_params(prompt, self._model, stream=False)
        model = params["model"]
        ctx = LogContext(provider=PROVIDER_NAME, model=model)
        normalized_log_event(self._logger, "chat.start", ctx, phase="start", messages=len(params["messages"]))
        response = self._create(params, model=model, token=token)
        if token is not None:
            token.raise_if_cancelled()
        if not response.choices:
            raise ProviderError(
                code=ErrorCode.UNKNOWN,
                message="response contained no choices",
                provider=PROVIDER_NAME,
                model=model,
            )
        choice = response.choices[0]
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx,
            phase="finalize",
            emitted=True,
            finish_reason=choice.finish_reason,
        )
        return choice.message.content or ""

    def stream(
        self,
        prompt: Prompt,
        sink: Callable[[bytes], Any],
        *,
        token: Optional[CancellationToken] = None,
    ) -> None:
        """Call ``sink`` once per chunk with its ``delta.content`` in arrival order.

        Chunks without choices are skipped; an empty or missing delta (the
        role-only first chunk, the finish chunk) is delivered as ``b""``.
        Cancelling ``token`` closes the SDK stream, which unblocks a pending read.
        """
        params = build_chat_params(prompt, self._model, stream=True)
        model = params["model"]
        ctx = LogContext(provider=PROVIDER_NAME, model=model)
        normalized_log_event(self._logger, "stream.start", ctx, phase="start", messages=len(params["messages"]))
        stream = self._create(params, model=model, token=token)
        unregister = token.on_cancel(stream.close) if token is not None else None
        emitted = 0
        try:
            chunks = iter(stream)
            while True:
                try:
                    chunk = next(chunks)
                except StopIteration:
                    break
                except _STREAM_ERRORS as e:
                    raise map_sdk_error(e, model=model, token=token) from e
                if token is not None:
                    token.raise_if_cancelled()
                content = _delta_text(chunk)
                if content is not None:
                    sink(content.encode("utf-8"))
                    emitted += 1
            if token is not None:
                token.raise_if_cancelled()
        finally:
            if unregister is not None:
                unregister()
            stream.close()
        normalized_log_event(self._logger, "stream.end", ctx, phase="finalize", emitted=emitted)

    def _create(self, params: Dict[str, Any], *, model: str, token: Optional[CancellationToken]) -> Any:
        try:
            return run_cancellable(
                partial(self._client.chat.completions.create, **params),
                token,
                discard=_release,
                name="chatwire-openai-create",
            )
        except TypeError as e:
            raise EncodingError(message=f"build chat params: {e}", provider=PROVIDER_NAME, raw=e) from e
        except _STREAM_ERRORS as e:
            raise map_sdk_error(e, model=model, token=token) from e


__all__ = ["OpenAIChatModel", "build_chat_params", "build_messages", "map_sdk_error"]
