"""Tests for Pydantic models — verify contracts serialize correctly."""

import pytest
from pydantic import ValidationError

from transcript_analyzer.events import (
    DoneEvent,
    ErrorEvent,
    TextDeltaEvent,
    ToolProgressEvent,
    parse_wire_event,
)
from transcript_analyzer.models import (
    AnalyzeTranscriptRequest,
    ErrorResponse,
    HealthResponse,
    ResearchRequest,
    TranscriptResponse,
)


class TestAnalyzeTranscriptRequest:
    def test_accepts_transcript(self):
        req = AnalyzeTranscriptRequest(transcript="Hello")
        assert req.transcript == "Hello"

    @pytest.mark.parametrize("value", ["", 7, None, ["a"]])
    def test_rejects_empty_or_non_string(self, value):
        with pytest.raises(ValidationError):
            AnalyzeTranscriptRequest.model_validate({"transcript": value})


class TestResearchRequest:
    def test_model_optional(self):
        req = ResearchRequest.model_validate({"messages": [{"role": "user", "content": "Hi"}]})
        assert req.model is None
        assert req.messages[0].role == "user"

    def test_rejects_unknown_role(self):
        with pytest.raises(ValidationError):
            ResearchRequest.model_validate({"messages": [{"role": "system", "content": "x"}]})


class TestResponseModels:
    def test_error_response_drops_missing_details(self):
        assert ErrorResponse(error="Nope").model_dump(exclude_none=True) == {"error": "Nope"}

    def test_health_defaults(self):
        h = HealthResponse(status="ok", anthropic_configured=True, gong_configured=False)
        assert h.version == "0.1.0"

    def test_transcript_response_uses_camel_case(self):
        r = TranscriptResponse(call_id="c1", transcript="t", raw_transcript={})
        assert r.model_dump(by_alias=True) == {
            "callId": "c1",
            "transcript": "t",
            "rawTranscript": {},
            "callDetails": None,
        }


class TestWireEvents:
    def test_type_is_first_key(self):
        assert list(ToolProgressEvent(tool="x", elapsed=1).model_dump()) == [
            "type",
            "tool",
            "elapsed",
        ]

    def test_parse_dispatches_on_type(self):
        assert parse_wire_event('{"type":"done"}') == DoneEvent()
        assert parse_wire_event('{"type":"error","message":"m"}') == ErrorEvent(message="m")
        assert parse_wire_event('{"type":"text_delta","text":"t"}') == TextDeltaEvent(text="t")

    def test_parse_rejects_unknown_type(self):
        with pytest.raises(ValidationError):
            parse_wire_event('{"type":"thinking","text":"t"}')
