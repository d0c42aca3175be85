"""Run a blocking call that a cancellation token can abandon.

Some waits cannot be broken by closing a response because no response exists
yet: ``httpx`` blocks inside ``send`` until the status line and headers
arrive (a non-streaming Ollama chat sends them only once generation is
complete), and an SDK ``create`` call blocks until its reply is parsed.

``run_cancellable`` runs such a call on a daemon worker thread and waits until
either the call finishes or the token fires. When the token fires first the
caller gets ``CancellationError`` at once; a result the worker produces later
is handed to ``discard`` so the abandoned connection is released.
"""

from __future__ import annotations

import concurrent.futures as cf
import threading
from functools import partial
from typing import Any, Callable, Optional, TypeVar

from .cancellation_error import CancellationError
from .cancellation_token import CancellationToken

T = TypeVar("T")


def _discard_late_result(discard: Callable[[Any], None], future: "cf.Future[Any]") -> None:
    if future.cancelled() or future.exception() is not None:
        return
    discard(future.result())


def run_cancellable(
    fn: Callable[[], T],
    token: Optional[CancellationToken],
    *,
    discard: Optional[Callable[[T], None]] = None,
    name: str = "chatwire-call",
) -> T:
    """Return ``fn()``, or raise ``CancellationError`` as soon as ``token`` fires.

    Without a token ``fn`` runs inline. Exceptions raised by ``fn`` are
    re-raised in the calling thread unchanged, except that a failure observed
    after cancellation is reported as ``CancellationError``.
    """
    if token is None:
        return fn()
    token.raise_if_cancelled()

    future: "cf.Future[T]" = cf.Future()
    wake = threading.Event()

    def _worker() -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            result = fn()
        except BaseException as exc:  # handed to the caller via the future
            future.set_exception(exc)
        else:
            future.set_result(result)

    future.add_done_callback(lambda _f: wake.set())
    unregister = token.on_cancel(wake.set)
    try:
        threading.Thread(target=_worker, name=name, daemon=True).start()
        wake.wait()
    finally:
        unregister()

    if not token.cancelled:
        return future.result()
    if not future.cancel() and discard is not None:
        future.add_done_callback(partial(_discard_late_result, discard))
    raise CancellationError(token.reason or "operation cancelled")


__all__ = ["run_cancellable"]
