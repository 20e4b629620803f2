"""Line buffering and SSE data-frame decoding across chunk boundaries."""

from __future__ import annotations

from inference_gateway.base.streaming import LineBuffer, data_payload, iter_sse_data
from inference_gateway.tests.utils import agen, run


def _collect(chunks):
    async def go():
        return [p async for p in iter_sse_data(agen(chunks))]

    return run(go())


def test_line_buffer_holds_partial_lines_until_newline():
    buf = LineBuffer()
    assert buf.feed(b"data: {\"a\"") == []  # nosec B101
    assert buf.pending == b"data: {\"a\""  # nosec B101
    assert buf.feed(b": 1}\r\nnext") == ['data: {"a": 1}']  # nosec B101
    assert buf.flush() == ["next"]  # nosec B101
    assert buf.pending == b""  # nosec B101


def test_line_buffer_rejoins_split_multibyte_character():
    text = "data: héllo\n".encode("utf-8")
    cut = text.index(b"\xc3") + 1
    buf = LineBuffer()
    assert buf.feed(text[:cut]) == []  # nosec B101
    assert buf.feed(text[cut:]) == ["data: héllo"]  # nosec B101


def test_data_payload_strips_prefix_and_single_space():
    assert data_payload("data: x") == "x"  # nosec B101
    assert data_payload("data:x") == "x"  # nosec B101
    assert data_payload("data:  x") == " x"  # nosec B101
    assert data_payload("event: message") is None  # nosec B101
    assert data_payload(": keep-alive") is None  # nosec B101


def test_iter_sse_data_survives_every_split_point():
    body = b'data: {"n": 1}\n\n: comment\nevent: ping\ndata: {"n": 2}\n\ndata: [DONE]\n\n'
    expected = ['{"n": 1}', '{"n": 2}', "[DONE]"]
    for cut in range(1, len(body)):
        assert _collect([body[:cut], body[cut:]]) == expected, cut  # nosec B101


def test_iter_sse_data_byte_by_byte_and_unterminated_tail():
    body = b'data: one\r\n\r\ndata: two'
    assert _collect([bytes([b]) for b in body]) == ["one", "two"]  # nosec B101
