"""Tests for SSE framing of wire events."""

from transcript_analyzer.events import (
    DoneEvent,
    ErrorEvent,
    TextDeltaEvent,
    ToolProgressEvent,
    ToolStartEvent,
    parse_wire_event,
)
from transcript_analyzer.sse import encode_event, encode_sentinel


class TestEncodeEvent:
    def test_text_delta_frame(self):
        frame = encode_event(TextDeltaEvent(text="Hello ")).encode()
        assert frame == b'data: {"type":"text_delta","text":"Hello "}\n\n'

    def test_tool_start_frame(self):
        frame = encode_event(ToolStartEvent(tool="WebSearch")).encode()
        assert frame == b'data: {"type":"tool_start","tool":"WebSearch"}\n\n'

    def test_tool_progress_frame(self):
        frame = encode_event(ToolProgressEvent(tool="WebSearch", elapsed=3.2)).encode()
        assert frame == b'data: {"type":"tool_progress","tool":"WebSearch","elapsed":3.2}\n\n'

    def test_done_frame(self):
        assert encode_event(DoneEvent()).encode() == b'data: {"type":"done"}\n\n'

    def test_error_frame(self):
        frame = encode_event(ErrorEvent(message="Stream error occurred")).encode()
        assert frame == b'data: {"type":"error","message":"Stream error occurred"}\n\n'

    def test_newlines_in_text_stay_on_one_line(self):
        frame = encode_event(TextDeltaEvent(text="line one\n\nline two")).encode()
        assert frame.count(b"\n") == 2
        assert frame.endswith(b"\n\n")

    def test_non_ascii_text_is_utf8(self):
        frame = encode_event(TextDeltaEvent(text="naïve — 日本")).encode()
        assert "naïve — 日本".encode() in frame

    def test_frame_decodes_back_to_event(self):
        event = ToolProgressEvent(tool="Bash", elapsed=12.5)
        frame = encode_event(event).encode().decode()
        payload = frame[len("data: "):-2]
        assert parse_wire_event(payload) == event


class TestSentinel:
    def test_sentinel_frame(self):
        assert encode_sentinel().encode() == b"data: [DONE]\n\n"
