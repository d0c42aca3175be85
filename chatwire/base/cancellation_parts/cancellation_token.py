"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` class passed to every chat, stream, and
embedding call. Besides cooperative polling it lets transports register
callbacks that run on cancellation, which is how a blocked network read is
interrupted (the callback closes the in-flight response).
"""

from __future__ import annotations

import threading
from contextlib import suppress
from threading import Lock
from typing import Callable, List

from .state import State
from .cancellation_error import CancellationError


class CancellationToken:
    """A cooperative cancellation token with optional cascading semantics.

    Thread-safe: ``cancel`` may be invoked from any thread while another thread
    is blocked inside a transport call that observes this token. Child tokens
    inherit cancellation when the parent is cancelled.
    """

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._children: List[CancellationToken] = []
        self._timer: threading.Timer | None = None
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation, run registered callbacks, cascade to children."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            callbacks = list(self._state.callbacks.values())
            self._state.callbacks.clear()
            children = list(self._children)
            timer = self._timer
        if timer is not None:
            timer.cancel()
        for callback in callbacks:
            # Callbacks release transport resources; a failing close must not
            # keep the remaining callbacks or children from running.
            with suppress(Exception):
                callback()
        for child in children:
            child.cancel(reason)

    def cancel_after(self, seconds: float, reason: str | None = None) -> "CancellationToken":
        """Schedule cancellation after ``seconds`` (a deadline); returns self.

        Only one deadline is tracked; scheduling again replaces the previous one.
        """
        timer = threading.Timer(seconds, self.cancel, kwargs={"reason": reason or f"deadline of {seconds}s exceeded"})
        timer.daemon = True
        with self._lock:
            if self._state.cancelled:
                return self
            previous, self._timer = self._timer, timer
        if previous is not None:
            previous.cancel()
        timer.start()
        return self

    def on_cancel(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register ``callback`` to run once on cancellation.

        Returns a function that unregisters the callback. If the token is
        already cancelled the callback runs immediately.
        """
        with self._lock:
            if not self._state.cancelled:
                key = self._state.next_id
                self._state.next_id += 1
                self._state.callbacks[key] = callback

                def _unregister() -> None:
                    with self._lock:
                        self._state.callbacks.pop(key, None)

                return _unregister
        callback()
        return lambda: None

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            should_cancel = self._state.cancelled
            reason = self._state.reason
        if should_cancel:
            token.cancel(reason)
        return token

    def raise_if_cancelled(self) -> None:
        """Raise ``CancellationError`` if token is cancelled."""
        if self._state.cancelled:
            raise CancellationError(self._state.reason or "operation cancelled")

    def child(self) -> "CancellationToken":
        """Create and link a child token (shortcut)."""
        return CancellationToken(parent=self)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, children={len(self._children)})"
        )


__all__ = ["CancellationToken"]
