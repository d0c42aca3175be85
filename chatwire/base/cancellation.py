"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose stable, provider-agnostic cancellation constructs via the canonical
``chatwire.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts``.

Notes
-----
- ``CancellationToken`` is the caller-supplied cancellation signal accepted
	by every call as the ``token=`` keyword. Deadlines are expressed with
	``CancellationToken.cancel_after(seconds)``.
- ``CancellationError`` is raised by operations that observe a cancellation.
- ``run_cancellable`` runs a blocking call (e.g. waiting for response
	headers) so that the token can abandon it promptly.
"""

from .cancellation_parts.cancellation_error import CancellationError
from .cancellation_parts.cancellation_token import CancellationToken
from .cancellation_parts.cancellable_call import run_cancellable

__all__ = ["CancellationToken", "CancellationError", "run_cancellable"]
