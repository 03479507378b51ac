"""Upstream message variants consumed by the streaming relay.

The agent client normalizes Claude Agent SDK messages into this closed set so
the translator can match on it exhaustively.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class TextBlock:
    text: str


@dataclass(frozen=True)
class ToolUseBlock:
    name: str
    id: str = ""


ContentBlock = Union[TextBlock, ToolUseBlock]


@dataclass(frozen=True)
class StreamEvent:
    """A raw provider event (content_block_delta, message_start, ...)."""

    event: dict[str, Any]


@dataclass(frozen=True)
class AssistantTurn:
    """A complete assistant message."""

    content: list[ContentBlock] = field(default_factory=list)


@dataclass(frozen=True)
class ToolProgress:
    """Heartbeat for a long-running tool invocation."""

    tool_name: str
    elapsed_seconds: float


@dataclass(frozen=True)
class Result:
    """Terminal message. Always the last one of an iteration, if present."""

    subtype: str

    @property
    def is_success(self) -> bool:
        return self.subtype == "success"


UpstreamMessage = Union[StreamEvent, AssistantTurn, ToolProgress, Result]
