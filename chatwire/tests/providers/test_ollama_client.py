"""Tests for ``OllamaClient`` wire calls against a mocked daemon."""
from __future__ import annotations

import json

import httpx
import pytest

from chatwire.base.errors import ProviderError
from chatwire.ollama.client import OllamaClient
from chatwire.ollama.wire import ChatRequest, EmbeddingRequest, EmbedRequest, OllamaMessage
from chatwire.tests.helpers import RecordingSink, ndjson, stream_response


def _chat_request(**kwargs):
    return ChatRequest(model="llama3.2", messages=[OllamaMessage(role="user", content="hi")], **kwargs)


def test_chat_forces_stream_false_and_decodes_metrics(make_ollama_client):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "model": "llama3.2",
                "created_at": "2024-01-01T00:00:00.123456789Z",
                "message": {"role": "assistant", "content": "hello"},
                "done": True,
                "done_reason": "stop",
                "total_duration": 1000,
                "eval_count": 3,
            },
        )

    reply = make_ollama_client(handler).chat(_chat_request(stream=True))

    assert seen["path"] == "/api/chat"  # nosec B101
    assert seen["body"]["stream"] is False  # nosec B101
    assert reply.message.content == "hello" and reply.done and reply.done_reason == "stop"  # nosec B101
    assert reply.eval_count == 3  # nosec B101


def test_chat_omits_unset_optional_fields(make_ollama_client):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"message": {"role": "assistant", "content": ""}, "done": True})

    make_ollama_client(handler).chat(_chat_request())
    assert set(seen["body"]) == {"model", "messages", "stream"}  # nosec B101
    assert seen["body"]["messages"] == [{"role": "user", "content": "hi"}]  # nosec B101


def test_chat_stream_forces_stream_true_and_forwards_raw_frames(make_ollama_client):
    frames = [
        {"message": {"role": "assistant", "content": "he"}, "done": False},
        {"message": {"role": "assistant", "content": "llo"}, "done": False},
        {"message": {"role": "assistant", "content": ""}, "done": True, "done_reason": "stop"},
    ]
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return stream_response(200, [ndjson(*frames)])

    sink = RecordingSink()
    delivered = make_ollama_client(handler).chat_stream(_chat_request(), sink)

    assert seen["body"]["stream"] is True  # nosec B101
    assert delivered == 3  # nosec B101
    assert [json.loads(f) for f in sink.frames] == frames  # nosec B101


def test_embed_posts_batch(make_ollama_client):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"model": "e", "embeddings": [[0.1, 0.2], [0.3, 0.4]]})

    reply = make_ollama_client(handler).embed(EmbedRequest(model="e", input=["a", "b"], truncate=True))
    assert seen["path"] == "/api/embed"  # nosec B101
    assert seen["body"] == {"model": "e", "input": ["a", "b"], "truncate": True}  # nosec B101
    assert reply.embeddings == [[0.1, 0.2], [0.3, 0.4]]  # nosec B101


def test_legacy_embeddings_endpoint(make_ollama_client):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        return httpx.Response(200, json={"embedding": [1.0, 2.0]})

    reply = make_ollama_client(handler).embeddings(EmbeddingRequest(model="e", prompt="x"))
    assert seen["path"] == "/api/embeddings"  # nosec B101
    assert reply.embedding == [1.0, 2.0]  # nosec B101


def test_model_not_found_surfaces_status_and_message(make_ollama_client):
    client = make_ollama_client(lambda r: httpx.Response(404, json={"error": "model 'x' not found"}))
    with pytest.raises(ProviderError) as info:
        client.chat(_chat_request())
    assert "404" in info.value.message and "model 'x' not found" in info.value.message  # nosec B101
    assert info.value.model == "llama3.2"  # nosec B101


def test_from_config_prefers_argument_then_env_then_default(monkeypatch):
    assert OllamaClient.from_config().base_url == "http://localhost:11434"  # nosec B101
    monkeypatch.setenv("OLLAMA_HOST", "http://gpu-box:11434/")
    assert OllamaClient.from_config().base_url == "http://gpu-box:11434"  # nosec B101
    assert OllamaClient.from_config("http://explicit:1").base_url == "http://explicit:1"  # nosec B101
