"""Cancellation parts: token, error, cancellable call, and internal state."""

from .cancellable_call import run_cancellable
from .cancellation_error import CancellationError
from .cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancellationError", "run_cancellable"]
