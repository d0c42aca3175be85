"""JSON-over-HTTP transport with newline-delimited streaming.

Purpose:
    Execute provider calls over HTTP for adapters that speak a plain JSON
    protocol (Ollama). Two entry points:

    - ``post``: one request, one JSON body decoded into a typed shape.
    - ``stream``: one request whose body is a sequence of newline-delimited
      JSON frames, each probed for an in-band error and then handed to a
      caller-supplied sink.

External dependencies:
    - ``httpx`` for the connection pool and request execution. The client is
      either injected (caller owns timeout/TLS/proxy) or taken from the shared
      pool in :mod:`chatwire.base.http.client`.

Streaming lifecycle (per call):
    IDLE -> REQUEST_SENT -> READING -> (FRAME_READY)* -> CLOSED | FAILED

    For every frame, in order: an in-band ``error`` field fails the call with
    ``ProviderError`` regardless of status; otherwise a status >= 400 fails it
    with the status line; otherwise the raw frame bytes go to the sink. The
    next network read happens only after the sink returns. Whatever the sink
    raises propagates unchanged. The response is closed on every exit path.

Cancellation:
    The token is checked before sending and before each delivery. With a
    token, ``send`` runs through ``run_cancellable``: while waiting for the
    status line and headers, cancelling returns ``CancellationError`` at once
    and the late response is closed when it arrives. While a body is being
    read, cancelling the token closes the response from the cancelling
    thread, which unblocks the read; the resulting failure is reported as
    ``CancellationError``.

No retries and no logging of failures happen here; errors go to the caller.
"""

from __future__ import annotations

from contextlib import closing
from functools import partial
from typing import Any, Callable, Iterator, Mapping, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..cancellation import CancellationError, CancellationToken, run_cancellable
from ..codec import ErrorEnvelope, decode_frame, marshal, unmarshal
from ..constants import JSON_CONTENT_TYPE, USER_AGENT
from ..errors import ChatwireError, ErrorCode, ProviderError, TransportError, classify_status, status_line
from ..logging import LogContext, get_logger, log_event
from ...config.defaults import STREAM_INITIAL_BUFFER_BYTES
from .client import get_httpx_client
from .framing import FrameReader

M = TypeVar("M", bound=BaseModel)

Sink = Callable[[bytes], Any]

_READ_ERRORS = (httpx.HTTPError, httpx.StreamError)


class HttpTransport:
    """Shared, stateless-per-call HTTP transport for one provider endpoint.

    Parameters:
        base_url: Endpoint root, e.g. ``http://localhost:11434``. Request paths
            are appended to it, so a base URL with a path prefix is kept.
        http_client: Optional caller-owned ``httpx.Client``. When omitted a
            pooled client keyed by ``(base_url, provider)`` is used.
        provider: Provider key recorded on errors and log events.
        initial_buffer_bytes: Initial capacity of each stream's frame buffer.

    Thread-safety:
        Instances hold only read-only configuration; every call owns its own
        request, response, and buffer, so one transport can serve concurrent
        callers.
    """

    def __init__(
        self,
        base_url: str,
        *,
        http_client: Optional[httpx.Client] = None,
        provider: str = "unknown",
        initial_buffer_bytes: int = STREAM_INITIAL_BUFFER_BYTES,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._provider = provider
        self._client = http_client if http_client is not None else get_httpx_client(self._base_url, purpose=provider)
        self._initial_buffer_bytes = initial_buffer_bytes
        self._logger = get_logger("chatwire.transport")

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def http_client(self) -> httpx.Client:
        return self._client

    def url(self, path: str) -> str:
        """Join ``path`` onto the base URL, keeping any base path prefix."""
        return f"{self._base_url}/{path.lstrip('/')}"

    # ----- public calls -----

    def post(
        self,
        path: str,
        payload: BaseModel | Mapping[str, Any],
        shape: Type[M],
        *,
        token: CancellationToken | None = None,
        model: Optional[str] = None,
    ) -> M:
        """Perform one non-streaming POST and decode the body into ``shape``.

        Raises:
            ProviderError: status >= 400 with a decodable ``{"error": ...}``
                body; the message holds the status line and the error text.
            TransportError: network failure, an undecodable success body, or
                an undecodable error body (status preserved on the error).
            CancellationError: ``token`` fired before the body was read.
        """
        response = self._send(self._build_request(path, payload), token, model=model, streaming=False)
        unregister = token.on_cancel(response.close) if token is not None else None
        try:
            try:
                body = response.read()
            except _READ_ERRORS as e:
                raise self._read_failure(e, token, response.status_code) from e
            if token is not None:
                token.raise_if_cancelled()
            return self._decode_body(response, body, shape, model=model)
        finally:
            if unregister is not None:
                unregister()
            response.close()

    def stream(
        self,
        path: str,
        payload: BaseModel | Mapping[str, Any],
        sink: Sink,
        *,
        token: CancellationToken | None = None,
        model: Optional[str] = None,
    ) -> int:
        """POST ``payload`` and deliver each content frame to ``sink`` in order.

        Returns the number of frames delivered. ``sink`` is invoked
        synchronously; an exception it raises stops the stream immediately
        and propagates as-is.

        Raises:
            ProviderError: a frame carries a non-empty ``error`` field, or the
                status is >= 400.
            TransportError: network failure or a frame that is not a JSON object.
            CancellationError: ``token`` fired.
        """
        delivered = 0
        with closing(self.iter_frames(path, payload, token=token, model=model)) as frames:
            for frame in frames:
                sink(frame)
                delivered += 1
        return delivered

    def iter_frames(
        self,
        path: str,
        payload: BaseModel | Mapping[str, Any],
        *,
        token: CancellationToken | None = None,
        model: Optional[str] = None,
    ) -> Iterator[bytes]:
        """Generator form of :meth:`stream`; yields raw content frames.

        Close the generator (or exhaust it) to release the response.
        """
        response = self._send(self._build_request(path, payload), token, model=model, streaming=True)
        unregister = token.on_cancel(response.close) if token is not None else None
        try:
            status = response.status_code
            frames = iter(FrameReader(response.iter_bytes(), initial_capacity=self._initial_buffer_bytes))
            seen_any = False
            while True:
                try:
                    raw = next(frames)
                except StopIteration:
                    break
                except _READ_ERRORS as e:
                    raise self._read_failure(e, token, status) from e
                if token is not None:
                    token.raise_if_cancelled()
                seen_any = True
                frame = decode_frame(raw, provider=self._provider, status_code=status)
                if frame.is_error:
                    raise ProviderError(
                        code=classify_status(status) if status >= 400 else ErrorCode.UNKNOWN,
                        message=frame.error or "",
                        provider=self._provider,
                        model=model,
                        status_code=status,
                    )
                if status >= 400:
                    raise self._status_error(response, model=model)
                yield raw
            if token is not None:
                token.raise_if_cancelled()
            if status >= 400 and not seen_any:
                raise self._status_error(response, model=model)
        finally:
            if unregister is not None:
                unregister()
            response.close()

    # ----- helpers -----

    def _build_request(self, path: str, payload: BaseModel | Mapping[str, Any]) -> httpx.Request:
        body = marshal(payload, provider=self._provider)
        headers = {
            "Content-Type": JSON_CONTENT_TYPE,
            "Accept": JSON_CONTENT_TYPE,
            "User-Agent": USER_AGENT,
        }
        try:
            return self._client.build_request("POST", self.url(path), content=body, headers=headers)
        except httpx.InvalidURL as e:
            raise TransportError(message=f"invalid url: {e}", provider=self._provider, raw=e) from e

    def _send(
        self,
        request: httpx.Request,
        token: CancellationToken | None,
        *,
        model: Optional[str],
        streaming: bool,
    ) -> httpx.Response:
        if token is not None:
            token.raise_if_cancelled()
        log_event(
            self._logger,
            "http.request",
            LogContext(provider=self._provider, model=model),
            method=request.method,
            url=str(request.url),
            stream=streaming,
        )
        try:
            response = run_cancellable(
                partial(self._client.send, request, stream=True),
                token,
                discard=httpx.Response.close,
                name=f"chatwire-{self._provider}-send",
            )
        except httpx.HTTPError as e:
            if token is not None and token.cancelled:
                raise CancellationError(token.reason or "operation cancelled") from e
            raise TransportError(message=f"send: {e}", provider=self._provider, raw=e) from e
        if token is not None and token.cancelled:
            response.close()
            raise CancellationError(token.reason or "operation cancelled")
        return response

    def _read_failure(self, exc: BaseException, token: CancellationToken | None, status: int) -> ChatwireError:
        if token is not None and token.cancelled:
            return CancellationError(token.reason or "operation cancelled")
        return TransportError(message=f"read: {exc}", provider=self._provider, status_code=status, raw=exc)

    def _decode_body(self, response: httpx.Response, body: bytes, shape: Type[M], *, model: Optional[str]) -> M:
        status = response.status_code
        if status < 400:
            return unmarshal(body, shape, provider=self._provider, status_code=status)
        line = status_line(status, response.reason_phrase)
        try:
            envelope = ErrorEnvelope.model_validate_json(body)
        except ValidationError as e:
            raise TransportError(
                message=f"http status code: {line}, {e}",
                provider=self._provider,
                status_code=status,
                raw=e,
            ) from e
        raise ProviderError(
            code=classify_status(status),
            message=f"http status code: {line}, {envelope.text()}",
            provider=self._provider,
            model=model,
            status_code=status,
        )

    def _status_error(self, response: httpx.Response, *, model: Optional[str]) -> ProviderError:
        status = response.status_code
        return ProviderError(
            code=classify_status(status),
            message=f"http status code: {status_line(status, response.reason_phrase)}",
            provider=self._provider,
            model=model,
            status_code=status,
        )


__all__ = ["HttpTransport", "Sink"]
