"""Streaming contract for ``HttpTransport.stream``.

Frames are delivered in order, one sink call per frame; an in-band error or an
error status ends the stream with ``ProviderError``; sink exceptions propagate
unchanged and stop further reads.
"""
from __future__ import annotations

import httpx
import pytest

from chatwire.base.errors import ErrorCode, ProviderError, SinkError, TransportError
from chatwire.tests.helpers import RecordingSink, chunked, ndjson, stream_response

FRAMES = [{"message": {"content": c}, "done": False} for c in ("a", "b", "c", "d")]


def _lines(objs):
    return ndjson(*objs).splitlines()


@pytest.mark.parametrize("chunk_size", [1, 7, 64, 10_000])
def test_frames_without_errors_reach_sink_in_order(make_transport, chunk_size):
    body = ndjson(*FRAMES)
    transport = make_transport(lambda r: stream_response(200, chunked(body, chunk_size)))
    sink = RecordingSink()

    delivered = transport.stream("/api/chat", {"stream": True}, sink)

    assert sink.frames == _lines(FRAMES)  # nosec B101
    assert delivered == len(FRAMES)  # nosec B101


def test_in_band_error_on_frame_k_stops_after_k_minus_1_deliveries(make_transport):
    objs = FRAMES[:2] + [{"error": "out of memory"}] + FRAMES[2:]
    transport = make_transport(lambda r: stream_response(200, [ndjson(*objs)]))
    sink = RecordingSink()

    with pytest.raises(ProviderError) as info:
        transport.stream("/api/chat", {}, sink, model="m")

    assert sink.frames == _lines(FRAMES[:2])  # nosec B101
    assert info.value.message == "out of memory"  # nosec B101
    assert info.value.code is ErrorCode.UNKNOWN  # nosec B101
    assert info.value.status_code == 200  # nosec B101


def test_in_band_error_wins_over_status(make_transport):
    transport = make_transport(lambda r: stream_response(404, [ndjson({"error": "model not found"})]))
    with pytest.raises(ProviderError) as info:
        transport.stream("/api/chat", {}, RecordingSink())
    assert info.value.message == "model not found"  # nosec B101
    assert info.value.code is ErrorCode.NOT_FOUND  # nosec B101


def test_error_status_without_error_field_fails_with_status_line(make_transport):
    transport = make_transport(lambda r: stream_response(500, [ndjson({"message": {"content": "x"}})]))
    sink = RecordingSink()
    with pytest.raises(ProviderError) as info:
        transport.stream("/api/chat", {}, sink)
    assert sink.frames == []  # nosec B101
    assert "500" in info.value.message  # nosec B101
    assert info.value.code is ErrorCode.SERVER_ERROR  # nosec B101


def test_error_status_with_empty_body_fails_with_status_line(make_transport):
    transport = make_transport(lambda r: stream_response(503, []))
    with pytest.raises(ProviderError) as info:
        transport.stream("/api/chat", {}, RecordingSink())
    assert "503 Service Unavailable" in info.value.message  # nosec B101


def test_sink_exception_propagates_unchanged_and_stops_stream(make_transport):
    boom = SinkError("enough")
    transport = make_transport(lambda r: stream_response(200, [ndjson(*FRAMES)]))
    sink = RecordingSink(fail_on=2, exc=boom)

    with pytest.raises(SinkError) as info:
        transport.stream("/api/chat", {}, sink)

    assert info.value is boom  # nosec B101
    assert len(sink.frames) == 2  # nosec B101


def test_arbitrary_sink_exception_is_not_wrapped(make_transport):
    class Custom(Exception):
        pass

    exc = Custom("x")
    transport = make_transport(lambda r: stream_response(200, [ndjson(*FRAMES)]))
    with pytest.raises(Custom) as info:
        transport.stream("/api/chat", {}, RecordingSink(fail_on=1, exc=exc))
    assert info.value is exc  # nosec B101


def test_malformed_frame_raises_transport_error(make_transport):
    transport = make_transport(lambda r: stream_response(200, [ndjson(FRAMES[0]) + b"not json\n"]))
    sink = RecordingSink()
    with pytest.raises(TransportError):
        transport.stream("/api/chat", {}, sink)
    assert len(sink.frames) == 1  # nosec B101


def test_empty_success_body_delivers_nothing(make_transport):
    transport = make_transport(lambda r: stream_response(200, []))
    sink = RecordingSink()
    assert transport.stream("/api/chat", {}, sink) == 0  # nosec B101
    assert sink.frames == []  # nosec B101


def test_frame_larger_than_initial_buffer_is_delivered_whole(make_transport):
    big = {"message": {"content": "z" * 20_000}}
    body = ndjson(big, FRAMES[0])
    transport = make_transport(lambda r: stream_response(200, chunked(body, 1024)), initial_buffer_bytes=64)
    sink = RecordingSink()
    transport.stream("/api/chat", {}, sink)
    assert sink.frames == _lines([big, FRAMES[0]])  # nosec B101


def test_read_failure_mid_stream_raises_transport_error(make_transport):
    def body():
        yield ndjson(FRAMES[0])
        raise httpx.ReadError("reset by peer")

    transport = make_transport(lambda r: httpx.Response(200, content=body()))
    sink = RecordingSink()
    with pytest.raises(TransportError) as info:
        transport.stream("/api/chat", {}, sink)
    assert len(sink.frames) == 1  # nosec B101
    assert "reset by peer" in info.value.message  # nosec B101


def test_response_is_closed_on_every_exit(make_transport):
    responses = []

    def handler(request: httpx.Request) -> httpx.Response:
        resp = stream_response(200, [ndjson(*FRAMES)])
        responses.append(resp)
        return resp

    transport = make_transport(handler)
    transport.stream("/api/chat", {}, RecordingSink())
    with pytest.raises(RuntimeError):
        transport.stream("/api/chat", {}, RecordingSink(fail_on=1))
    assert all(r.is_closed for r in responses)  # nosec B101
