"""Shared helpers for building mock HTTP bodies and recording sink calls."""

from __future__ import annotations

import json
import threading
from typing import Any, Iterable, Iterator, List, Optional

import httpx


def ndjson(*objects: Any) -> bytes:
    """Encode ``objects`` as newline-delimited JSON."""
    return b"".join(json.dumps(o).encode("utf-8") + b"\n" for o in objects)


def chunked(data: bytes, size: int) -> List[bytes]:
    """Split ``data`` into ``size``-byte pieces."""
    return [data[i : i + size] for i in range(0, len(data), size)]


def stream_response(status: int, chunks: Iterable[bytes]) -> httpx.Response:
    """A response whose body is produced lazily from ``chunks``."""
    return httpx.Response(status, content=iter(list(chunks)))


class RecordingSink:
    """Sink that records every frame and can raise on a chosen call."""

    def __init__(self, fail_on: Optional[int] = None, exc: Optional[BaseException] = None) -> None:
        self.frames: List[bytes] = []
        self.fail_on = fail_on
        self.exc = exc or RuntimeError("sink failed")

    def __call__(self, frame: bytes) -> None:
        self.frames.append(frame)
        if self.fail_on is not None and len(self.frames) == self.fail_on:
            raise self.exc


class BlockingStream(httpx.SyncByteStream):
    """Body that yields ``head`` then blocks until the response is closed.

    Closing the stream (which ``httpx.Response.close`` does) wakes the reader,
    which then fails the read the way a closed socket would.
    """

    def __init__(self, head: bytes, *, wait_seconds: float = 5.0) -> None:
        self._head = head
        self._wait_seconds = wait_seconds
        self.closed = threading.Event()

    def __iter__(self) -> Iterator[bytes]:
        yield self._head
        self.closed.wait(self._wait_seconds)
        raise httpx.ReadError("connection closed")

    def close(self) -> None:
        self.closed.set()


__all__ = ["ndjson", "chunked", "stream_response", "RecordingSink", "BlockingStream"]
