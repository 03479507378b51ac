"""SSE framing: wire events to `data: <json>\\n\\n` frames.

Frames use a bare `\\n` separator so every frame on the wire is exactly
`data: ` + payload + two newlines.
"""

from __future__ import annotations

from sse_starlette.sse import ServerSentEvent

from transcript_analyzer.events import DONE_SENTINEL, WireEvent

SSE_SEPARATOR = "\n"


def encode_event(event: WireEvent) -> ServerSentEvent:
    """Frame one wire event."""
    return ServerSentEvent(data=event.model_dump_json(), sep=SSE_SEPARATOR)


def encode_sentinel() -> ServerSentEvent:
    """Frame the end-of-stream marker. Not JSON."""
    return ServerSentEvent(data=DONE_SENTINEL, sep=SSE_SEPARATOR)
