"""Translate upstream agent messages into wire events."""

from __future__ import annotations

import logging
from typing import assert_never

from transcript_analyzer.events import (
    DoneEvent,
    ErrorEvent,
    TextDeltaEvent,
    ToolProgressEvent,
    ToolStartEvent,
    WireEvent,
)
from transcript_analyzer.upstream import (
    AssistantTurn,
    Result,
    StreamEvent,
    ToolProgress,
    ToolUseBlock,
    UpstreamMessage,
)

logger = logging.getLogger(__name__)

ANALYSIS_FAILURE_MESSAGE = "Analysis did not complete successfully"


class EventTranslator:
    """Maps each upstream message to zero or more wire events.

    `failure_message` is what the client sees when the agent finishes with a
    non-success result; the result subtype itself is only logged.
    """

    def __init__(self, failure_message: str = ANALYSIS_FAILURE_MESSAGE):
        self.failure_message = failure_message

    def translate(self, message: UpstreamMessage) -> list[WireEvent]:
        if isinstance(message, StreamEvent):
            return self._translate_stream_event(message)

        if isinstance(message, AssistantTurn):
            return [
                ToolStartEvent(tool=block.name)
                for block in message.content
                if isinstance(block, ToolUseBlock)
            ]

        if isinstance(message, ToolProgress):
            return [
                ToolProgressEvent(
                    tool=message.tool_name,
                    elapsed=message.elapsed_seconds,
                )
            ]

        if isinstance(message, Result):
            if message.is_success:
                return [DoneEvent()]
            logger.warning(
                "Agent finished without success (subtype=%s)", message.subtype
            )
            return [ErrorEvent(message=self.failure_message)]

        assert_never(message)

    @staticmethod
    def _translate_stream_event(message: StreamEvent) -> list[WireEvent]:
        event = message.event
        if event.get("type") != "content_block_delta":
            return []
        delta = event.get("delta") or {}
        if delta.get("type") != "text_delta":
            return []
        return [TextDeltaEvent(text=delta.get("text", ""))]
