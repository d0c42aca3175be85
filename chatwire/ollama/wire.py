"""
Pydantic wire schemas for the Ollama HTTP API.

Purpose
-------
Typed request/response bodies for ``/api/chat``, ``/api/embed`` and the legacy
``/api/embeddings`` endpoint. Field names match the JSON keys Ollama uses, so
encoding is ``model_dump_json(exclude_none=True)`` and decoding is
``model_validate_json``.

Design
------
- Request models forbid unknown fields: a typo in ``CallOptions.extra`` fails
  at construction instead of being silently sent.
- Response models ignore unknown fields so newer daemons keep decoding.
- Durations are integer nanoseconds, as reported by the daemon.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

KeepAlive = Union[str, int, float]


class _Request(BaseModel):
    model_config = ConfigDict(extra="forbid")


class _Response(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ToolCallFunction(BaseModel):
    name: str
    arguments: Dict[str, Any] = Field(default_factory=dict)


class ToolCall(BaseModel):
    function: ToolCallFunction


class OllamaMessage(BaseModel):
    """One chat turn. ``images`` holds base64-encoded image data."""

    role: str
    content: str = ""
    images: Optional[List[str]] = None
    tool_calls: Optional[List[ToolCall]] = None


class Metrics(_Response):
    total_duration: Optional[int] = None
    load_duration: Optional[int] = None
    prompt_eval_count: Optional[int] = None
    prompt_eval_duration: Optional[int] = None
    eval_count: Optional[int] = None
    eval_duration: Optional[int] = None


class ChatRequest(_Request):
    """Body of ``POST /api/chat``.

    ``stream`` is set by the client method used (``chat`` forces False,
    ``chat_stream`` forces True).
    """

    model: str
    messages: List[OllamaMessage] = Field(default_factory=list)
    stream: bool = False
    format: Optional[Union[str, Dict[str, Any]]] = None
    keep_alive: Optional[KeepAlive] = None
    tools: Optional[List[Dict[str, Any]]] = None
    options: Optional[Dict[str, Any]] = None


class ChatResponse(Metrics):
    """Body of a non-streaming chat reply, and of each streamed frame."""

    model: str = ""
    created_at: Optional[str] = None
    message: OllamaMessage = Field(default_factory=lambda: OllamaMessage(role="assistant"))
    done_reason: Optional[str] = None
    done: bool = False


class EmbedRequest(_Request):
    """Body of ``POST /api/embed``; ``input`` is one string or a list."""

    model: str
    input: Union[str, List[str]]
    keep_alive: Optional[KeepAlive] = None
    truncate: Optional[bool] = None
    options: Optional[Dict[str, Any]] = None


class EmbedResponse(_Response):
    model: str = ""
    embeddings: List[List[float]] = Field(default_factory=list)
    total_duration: Optional[int] = None
    load_duration: Optional[int] = None
    prompt_eval_count: Optional[int] = None


class EmbeddingRequest(_Request):
    """Body of the legacy single-prompt ``POST /api/embeddings``."""

    model: str
    prompt: str
    keep_alive: Optional[KeepAlive] = None
    options: Optional[Dict[str, Any]] = None


class EmbeddingResponse(_Response):
    embedding: List[float] = Field(default_factory=list)


__all__ = [
    "ToolCallFunction",
    "ToolCall",
    "OllamaMessage",
    "Metrics",
    "ChatRequest",
    "ChatResponse",
    "EmbedRequest",
    "EmbedResponse",
    "EmbeddingRequest",
    "EmbeddingResponse",
]
