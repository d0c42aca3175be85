"""Request/response codec.

Purpose:
- Serialize outbound payloads to JSON bytes and deserialize inbound payloads
  (single-shot bodies and individual stream frames) into typed results.
- Wire shapes are pydantic models, so field names, optional fields, and types
  are declared once per provider schema (``chatwire.ollama.wire``).

Failure semantics:
- ``marshal`` raises ``EncodingError``; nothing has been sent yet.
- ``unmarshal`` and ``decode_frame`` raise ``TransportError``: the server
  answered with bytes that do not match the expected shape.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic_core import PydanticSerializationError

from .errors import EncodingError, TransportError

M = TypeVar("M", bound=BaseModel)


class ErrorEnvelope(BaseModel):
    """Generic ``{"error": ...}`` envelope probed on every body and frame.

    ``error`` is usually a string (Ollama), but OpenAI-compatible servers send
    ``{"error": {"message": ...}}``; both forms are normalized by ``text``.
    """

    model_config = ConfigDict(extra="ignore")

    error: Any = None

    def text(self) -> str:
        """Return the error message, or ``""`` when no error is present."""
        err = self.error
        if err is None:
            return ""
        if isinstance(err, str):
            return err
        if isinstance(err, Mapping):
            message = err.get("message")
            if isinstance(message, str):
                return message
        return json.dumps(err, ensure_ascii=False, default=str)


@dataclass(frozen=True)
class StreamFrame:
    """A single decoded unit of a streaming response.

    Either a content frame (``error is None``; ``data`` is forwarded as-is)
    or a terminal error frame carrying the backend's message.
    """

    data: bytes
    error: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.error is not None


def marshal(value: BaseModel | Mapping[str, Any], *, provider: str = "unknown") -> bytes:
    """Serialize ``value`` to JSON bytes; ``None`` fields of models are omitted."""
    try:
        if isinstance(value, BaseModel):
            return value.model_dump_json(exclude_none=True).encode("utf-8")
        return json.dumps(value, ensure_ascii=False).encode("utf-8")
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise EncodingError(message=f"marshal: {e}", provider=provider, raw=e) from e


def unmarshal(data: bytes, shape: Type[M], *, provider: str = "unknown", status_code: Optional[int] = None) -> M:
    """Decode ``data`` into ``shape`` or raise ``TransportError``."""
    try:
        return shape.model_validate_json(data)
    except ValidationError as e:
        raise TransportError(
            message=f"unmarshal {shape.__name__}: {e}",
            provider=provider,
            status_code=status_code,
            raw=e,
        ) from e


def decode_frame(data: bytes, *, provider: str = "unknown", status_code: Optional[int] = None) -> StreamFrame:
    """Probe one stream frame for an in-band error and wrap it as a `StreamFrame`."""
    envelope = unmarshal(data, ErrorEnvelope, provider=provider, status_code=status_code)
    message = envelope.text()
    return StreamFrame(data=data, error=message or None)


__all__ = [
    "ErrorEnvelope",
    "StreamFrame",
    "marshal",
    "unmarshal",
    "decode_frame",
]
