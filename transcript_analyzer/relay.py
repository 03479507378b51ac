"""Streaming relay: agent messages in, SSE frames out.

relay() drives one upstream iteration into one EventSink. The sink is an
async context manager whose exit writes the `[DONE]` sentinel and closes the
underlying stream, so every exit path (normal end, failed result, exception,
client disconnect) terminates the response exactly once.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import aclosing
from functools import partial

import anyio
from anyio.streams.memory import MemoryObjectSendStream
from sse_starlette.sse import EventSourceResponse, ServerSentEvent

from transcript_analyzer.events import STREAM_ERROR_MESSAGE, ErrorEvent, WireEvent
from transcript_analyzer.sse import SSE_SEPARATOR, encode_event, encode_sentinel
from transcript_analyzer.translator import EventTranslator
from transcript_analyzer.upstream import UpstreamMessage

logger = logging.getLogger(__name__)

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


class EventSink:
    """Writable side of one SSE response body."""

    def __init__(self, stream: MemoryObjectSendStream[ServerSentEvent]):
        self._stream = stream
        self._sentinel_written = False
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def __aenter__(self) -> EventSink:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        try:
            await self._write_sentinel()
        finally:
            self.close()

    async def send(self, event: WireEvent) -> None:
        """Write one frame. Returns once the response has taken it."""
        await self._stream.send(encode_event(event))

    async def send_error(self, message: str) -> None:
        """Best-effort error frame; a dead client is logged, not raised."""
        try:
            await self.send(ErrorEvent(message=message))
        except Exception:
            logger.warning("Could not deliver error event to client", exc_info=True)

    async def _write_sentinel(self) -> None:
        if self._sentinel_written or self._closed:
            return
        self._sentinel_written = True
        try:
            await self._stream.send(encode_sentinel())
        except (anyio.BrokenResourceError, anyio.ClosedResourceError):
            logger.info("Client disconnected before end of stream")

    def close(self) -> None:
        # Synchronous so it still runs when the enclosing task is cancelled
        if self._closed:
            return
        self._closed = True
        self._stream.close()


async def relay(
    messages: AsyncGenerator[UpstreamMessage, None],
    sink: EventSink,
    translator: EventTranslator,
) -> None:
    """Pump upstream messages through the translator into the sink.

    Each wire event is written before the next upstream message is requested.
    An exception from the agent or from a write ends the stream with a single
    error event; it is never re-raised, since headers are already sent.
    """
    async with sink:
        try:
            async with aclosing(messages):
                async for message in messages:
                    for event in translator.translate(message):
                        await sink.send(event)
        except Exception:
            logger.exception("Stream error")
            await sink.send_error(STREAM_ERROR_MESSAGE)


def stream_response(
    messages: AsyncGenerator[UpstreamMessage, None],
    translator: EventTranslator,
) -> EventSourceResponse:
    """Build the streaming HTTP response for one upstream iteration."""
    # Zero buffer: a send completes only when the response has consumed it
    send_stream, receive_stream = anyio.create_memory_object_stream(0)
    sink = EventSink(send_stream)
    return EventSourceResponse(
        receive_stream,
        data_sender_callable=partial(relay, messages, sink, translator),
        headers=SSE_HEADERS,
        media_type="text/event-stream",
        sep=SSE_SEPARATOR,
    )
