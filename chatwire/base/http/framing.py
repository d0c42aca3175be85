"""Newline-delimited frame reader over a chunked byte stream.

Streaming responses arrive as arbitrary chunks; frames are the lines between
``\\n`` separators. ``FrameReader`` reassembles them in an explicit, growable
``bytearray``: unread bytes are compacted to the front when the tail runs out
of room, and the buffer doubles when a single frame is larger than the whole
buffer. A frame is therefore never truncated, whatever its size.

Rules:
- A trailing ``\\r`` is stripped (CRLF-delimited servers).
- Blank and whitespace-only lines are skipped.
- An unterminated final frame is emitted when the stream ends.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from ...config.defaults import STREAM_INITIAL_BUFFER_BYTES


class FrameReader:
    """Iterate complete frames (``bytes`` without the separator) from ``chunks``.

    The reader pulls the next chunk only after every complete frame already
    buffered has been handed out, so a consumer that processes each frame
    before asking for the next one also gates network reads.
    """

    def __init__(self, chunks: Iterable[bytes], *, initial_capacity: int = STREAM_INITIAL_BUFFER_BYTES) -> None:
        self._chunks = chunks
        self._buf = bytearray(max(1, initial_capacity))
        self._start = 0  # first unread byte
        self._end = 0  # one past the last buffered byte
        self._scan = 0  # bytes before this offset hold no separator

    @property
    def capacity(self) -> int:
        """Current buffer size in bytes (grows, never shrinks)."""
        return len(self._buf)

    def __iter__(self) -> Iterator[bytes]:
        for chunk in self._chunks:
            if not chunk:
                continue
            self._append(chunk)
            yield from self._drain()
        if self._end > self._start:
            tail = self._take(self._end)
            self._end = self._start = self._scan = 0
            if tail.strip():
                yield tail

    def _append(self, chunk: bytes) -> None:
        n = len(chunk)
        if self._end + n > len(self._buf):
            unread = self._end - self._start
            if self._start:
                self._buf[0:unread] = self._buf[self._start : self._end]
                self._scan -= self._start
                self._start = 0
                self._end = unread
            if unread + n > len(self._buf):
                capacity = len(self._buf)
                while capacity < unread + n:
                    capacity *= 2
                self._buf.extend(bytes(capacity - len(self._buf)))
        self._buf[self._end : self._end + n] = chunk
        self._end += n

    def _drain(self) -> Iterator[bytes]:
        while True:
            idx = self._buf.find(b"\n", self._scan, self._end)
            if idx == -1:
                self._scan = self._end
                return
            frame = self._take(idx)
            self._start = self._scan = idx + 1
            if frame.strip():
                yield frame

    def _take(self, stop: int) -> bytes:
        frame = bytes(self._buf[self._start : stop])
        if frame.endswith(b"\r"):
            frame = frame[:-1]
        return frame


__all__ = ["FrameReader"]
