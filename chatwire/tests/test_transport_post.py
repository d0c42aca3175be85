"""Contract tests for ``HttpTransport.post`` (single JSON request/response)."""
from __future__ import annotations

import json

import httpx
import pytest
from pydantic import BaseModel

from chatwire.base.cancellation import CancellationError, CancellationToken
from chatwire.base.errors import EncodingError, ErrorCode, ProviderError, TransportError


class _Reply(BaseModel):
    value: str


def test_post_sends_json_with_headers_and_decodes_body(make_transport):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["headers"] = request.headers
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"value": "ok", "ignored": 1})

    transport = make_transport(handler)
    reply = transport.post("/api/thing", {"q": 1}, _Reply)

    assert reply == _Reply(value="ok")  # nosec B101
    assert seen["url"] == "http://ollama.test:11434/api/thing"  # nosec B101
    assert seen["body"] == {"q": 1}  # nosec B101
    assert seen["headers"]["content-type"] == "application/json"  # nosec B101
    assert seen["headers"]["accept"] == "application/json"  # nosec B101
    assert seen["headers"]["user-agent"].startswith("chatwire/")  # nosec B101
    assert "Python/" in seen["headers"]["user-agent"]  # nosec B101


def test_post_keeps_base_path_prefix():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.path)
        return httpx.Response(200, json={"value": "x"})

    from chatwire.base.http import HttpTransport

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        HttpTransport("http://proxy.test/ollama/", http_client=client).post("api/chat", {}, _Reply)
    assert seen == ["/ollama/api/chat"]  # nosec B101


def test_post_404_with_error_body_raises_provider_error(make_transport):
    transport = make_transport(lambda r: httpx.Response(404, json={"error": "model not found"}))
    with pytest.raises(ProviderError) as info:
        transport.post("/api/chat", {}, _Reply, model="nope")
    err = info.value
    assert "404" in err.message and "model not found" in err.message  # nosec B101
    assert err.code is ErrorCode.NOT_FOUND  # nosec B101
    assert err.status_code == 404 and err.model == "nope" and err.provider == "ollama"  # nosec B101


def test_post_error_status_with_undecodable_body_raises_transport_error(make_transport):
    transport = make_transport(lambda r: httpx.Response(502, content=b"<html>bad gateway</html>"))
    with pytest.raises(TransportError) as info:
        transport.post("/api/chat", {}, _Reply)
    assert info.value.status_code == 502  # nosec B101
    assert "502" in info.value.message  # nosec B101


def test_post_undecodable_success_body_raises_transport_error(make_transport):
    transport = make_transport(lambda r: httpx.Response(200, content=b"{"))
    with pytest.raises(TransportError):
        transport.post("/api/chat", {}, _Reply)


def test_post_network_failure_raises_transport_error(make_transport):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(TransportError) as info:
        make_transport(handler).post("/api/chat", {}, _Reply)
    assert "refused" in info.value.message  # nosec B101


def test_post_unserializable_payload_raises_encoding_error_before_sending(make_transport):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"value": "x"})

    with pytest.raises(EncodingError):
        make_transport(handler).post("/api/chat", {"bad": {1, 2}}, _Reply)
    assert calls == []  # nosec B101


def test_post_with_cancelled_token_never_sends(make_transport):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"value": "x"})

    token = CancellationToken()
    token.cancel("caller gave up")
    with pytest.raises(CancellationError) as info:
        make_transport(handler).post("/api/chat", {}, _Reply, token=token)
    assert info.value.reason == "caller gave up"  # nosec B101
    assert calls == []  # nosec B101
