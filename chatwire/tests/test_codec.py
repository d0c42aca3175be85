"""Unit tests for JSON marshal/unmarshal helpers and frame decoding."""
from __future__ import annotations

import json

import pytest
from pydantic import BaseModel

from chatwire.base.codec import ErrorEnvelope, decode_frame, marshal, unmarshal
from chatwire.base.errors import EncodingError, TransportError


class _Shape(BaseModel):
    name: str
    size: int | None = None


def test_marshal_model_omits_none_fields():
    assert json.loads(marshal(_Shape(name="a"))) == {"name": "a"}  # nosec B101


def test_marshal_mapping():
    assert json.loads(marshal({"k": [1, 2]})) == {"k": [1, 2]}  # nosec B101


def test_marshal_unserializable_raises_encoding_error():
    with pytest.raises(EncodingError) as info:
        marshal({"k": object()}, provider="ollama")
    assert info.value.provider == "ollama"  # nosec B101


def test_unmarshal_failure_raises_transport_error_with_status():
    with pytest.raises(TransportError) as info:
        unmarshal(b"not json", _Shape, provider="ollama", status_code=200)
    assert info.value.status_code == 200  # nosec B101


def test_unmarshal_success():
    assert unmarshal(b'{"name":"x","size":3}', _Shape) == _Shape(name="x", size=3)  # nosec B101


@pytest.mark.parametrize(
    "body,text",
    [
        (b'{"error":"boom"}', "boom"),
        (b'{"error":{"message":"nested"}}', "nested"),
        (b'{"error":{"code":7}}', '{"code": 7}'),
        (b'{"message":{"content":"hi"}}', ""),
        (b'{"error":""}', ""),
        (b'{"error":null}', ""),
    ],
)
def test_error_envelope_text(body, text):
    assert ErrorEnvelope.model_validate_json(body).text() == text  # nosec B101


def test_decode_frame_marks_error_frames():
    ok = decode_frame(b'{"message":{"content":"a"}}')
    bad = decode_frame(b'{"error":"model not found"}')
    assert not ok.is_error and ok.data == b'{"message":{"content":"a"}}'  # nosec B101
    assert bad.is_error and bad.error == "model not found"  # nosec B101


def test_decode_frame_rejects_non_json():
    with pytest.raises(TransportError):
        decode_frame(b"garbage", status_code=200)
