"""Client side of the analysis stream.

StreamReader turns raw response bytes into wire events and keeps the text the
UI should display. stream_analysis() drives it over an httpx streaming request.
"""

from __future__ import annotations

import codecs
import logging
from collections.abc import Callable

import httpx
from pydantic import ValidationError

from transcript_analyzer.events import (
    DONE_SENTINEL,
    ErrorEvent,
    TextDeltaEvent,
    WireEvent,
    parse_wire_event,
)

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "
APOLOGY_MESSAGE = "Sorry, I encountered an error analyzing the transcript."


class AnalysisRequestError(Exception):
    """The endpoint refused the request before streaming started."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class StreamReader:
    """Incremental parser for a `data: <json>\\n\\n` stream."""

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pending = ""
        self.display = ""
        self.finished = False

    def feed(self, chunk: bytes) -> list[WireEvent]:
        """Consume one chunk; return the events completed by it, in order."""
        self._pending += self._decoder.decode(chunk)
        *lines, self._pending = self._pending.split("\n")
        return self._handle_lines(lines)

    def close(self) -> list[WireEvent]:
        """Flush the decoder and any final unterminated line."""
        self._pending += self._decoder.decode(b"", final=True)
        lines, self._pending = [self._pending], ""
        return self._handle_lines(lines)

    def _handle_lines(self, lines: list[str]) -> list[WireEvent]:
        events = []
        for line in lines:
            event = self._parse_line(line.rstrip("\r"))
            if event is None:
                continue
            self._apply(event)
            events.append(event)
        return events

    def _parse_line(self, line: str) -> WireEvent | None:
        if not line.startswith(DATA_PREFIX):
            return None
        payload = line[len(DATA_PREFIX):]
        if payload == DONE_SENTINEL:
            self.finished = True
            return None
        try:
            return parse_wire_event(payload)
        except ValidationError:
            logger.debug("Skipping malformed stream line: %r", line)
            return None

    def _apply(self, event: WireEvent) -> None:
        if isinstance(event, TextDeltaEvent):
            self.display += event.text
        elif isinstance(event, ErrorEvent):
            self.display = APOLOGY_MESSAGE


def error_message(resp: httpx.Response) -> str:
    """The `error` field of a JSON object body, else the raw body text."""
    try:
        body = resp.json()
    except ValueError:
        return resp.text
    if isinstance(body, dict) and "error" in body:
        return str(body["error"])
    return resp.text


async def stream_analysis(
    client: httpx.AsyncClient,
    transcript: str,
    on_update: Callable[[str], None] | None = None,
    path: str = "/api/analyze-transcript",
) -> str:
    """POST a transcript and follow the stream to the end.

    Calls `on_update(display)` every time the displayed text changes and
    returns the final display text.
    """
    reader = StreamReader()
    async with client.stream("POST", path, json={"transcript": transcript}) as resp:
        if resp.status_code != 200:
            await resp.aread()
            raise AnalysisRequestError(resp.status_code, error_message(resp))

        async for chunk in resp.aiter_bytes():
            before = reader.display
            reader.feed(chunk)
            if on_update is not None and reader.display != before:
                on_update(reader.display)

    before = reader.display
    reader.close()
    if on_update is not None and reader.display != before:
        on_update(reader.display)
    return reader.display
