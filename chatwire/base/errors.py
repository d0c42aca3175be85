"""Unified error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``chatwire.base.errors_parts`` (and the cancellation error) to maintain a
stable import path.

Taxonomy:
    - ``EncodingError``: request payload could not be constructed.
    - ``TransportError``: network failure, malformed response, or an error
      envelope that could not be decoded.
    - ``ProviderError``: the backend reported an error (in-band or via status).
    - ``CancellationError``: the caller's cancellation token fired.
    - ``SinkError``: optional type for sinks that want to stop a stream.
"""

from .errors_parts.base_error import ChatwireError
from .errors_parts.error_code import ErrorCode
from .errors_parts.encoding_error import EncodingError
from .errors_parts.provider_error import ProviderError
from .errors_parts.sink_error import SinkError
from .errors_parts.transport_error import TransportError
from .errors_parts.classification import classify_status, status_line
from .cancellation_parts.cancellation_error import CancellationError

__all__ = [
    "ChatwireError",
    "ErrorCode",
    "EncodingError",
    "ProviderError",
    "SinkError",
    "TransportError",
    "CancellationError",
    "classify_status",
    "status_line",
]
