"""Wire events: the JSON payloads carried in each SSE `data:` line.

These models are the contract with the browser. Field order is the
serialization order, with `type` always first.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

DONE_SENTINEL = "[DONE]"

STREAM_ERROR_MESSAGE = "Stream error occurred"


class TextDeltaEvent(BaseModel):
    """data for type: text_delta"""
    type: Literal["text_delta"] = "text_delta"
    text: str


class ToolStartEvent(BaseModel):
    """data for type: tool_start"""
    type: Literal["tool_start"] = "tool_start"
    tool: str


class ToolProgressEvent(BaseModel):
    """data for type: tool_progress"""
    type: Literal["tool_progress"] = "tool_progress"
    tool: str
    elapsed: float


class DoneEvent(BaseModel):
    """data for type: done"""
    type: Literal["done"] = "done"


class ErrorEvent(BaseModel):
    """data for type: error"""
    type: Literal["error"] = "error"
    message: str


WireEvent = Annotated[
    Union[TextDeltaEvent, ToolStartEvent, ToolProgressEvent, DoneEvent, ErrorEvent],
    Field(discriminator="type"),
]

wire_event_adapter: TypeAdapter[WireEvent] = TypeAdapter(WireEvent)


def parse_wire_event(payload: str) -> WireEvent:
    """Parse one JSON payload. Raises pydantic.ValidationError if malformed."""
    return wire_event_adapter.validate_json(payload)
