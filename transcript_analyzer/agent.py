"""Agent layer: runs prompts through the Claude Agent SDK.

The critical interface is `AgentClient.stream()`, an async generator of
`UpstreamMessage` values. The relay and routes consume only that interface;
SDK message classes never leave this module.
"""

from __future__ import annotations

import logging
import os
from collections.abc import AsyncGenerator
from contextlib import aclosing
from dataclasses import dataclass, field
from typing import Any, Literal

from claude_agent_sdk import (
    AssistantMessage,
    ClaudeAgentOptions,
    ResultMessage,
    SystemMessage,
    query,
)
from claude_agent_sdk import TextBlock as SDKTextBlock
from claude_agent_sdk import ToolUseBlock as SDKToolUseBlock
from claude_agent_sdk.types import StreamEvent as SDKStreamEvent

from transcript_analyzer.config import Settings
from transcript_analyzer.upstream import (
    AssistantTurn,
    ContentBlock,
    Result,
    StreamEvent,
    TextBlock,
    ToolProgress,
    ToolUseBlock,
    UpstreamMessage,
)

logger = logging.getLogger(__name__)

ToolPolicy = Literal["none", "claude_code"]
PermissionMode = Literal["bypassPermissions", "default"]


@dataclass(frozen=True)
class AgentProfile:
    """Per-route agent configuration, passed through to the SDK as-is."""

    max_turns: int
    tools: ToolPolicy = "none"
    permission_mode: PermissionMode = "bypassPermissions"
    model: str | None = None
    include_partial_messages: bool = True
    cwd: str = field(default_factory=os.getcwd)


def build_options(profile: AgentProfile, settings: Settings) -> ClaudeAgentOptions:
    """Build ClaudeAgentOptions for one query."""
    if profile.tools == "none":
        tools: Any = []
    else:
        tools = {"type": "preset", "preset": profile.tools}

    return ClaudeAgentOptions(
        model=profile.model,
        max_turns=profile.max_turns,
        tools=tools,
        permission_mode=profile.permission_mode,
        include_partial_messages=profile.include_partial_messages,
        cwd=profile.cwd,
        env={"ANTHROPIC_API_KEY": settings.anthropic_api_key},
        stderr=_stderr_callback,
    )


def _stderr_callback(line: str) -> None:
    """Capture CLI subprocess stderr for debugging."""
    logger.warning("CLI stderr: %s", line)


def normalize_message(msg: Any) -> UpstreamMessage | None:
    """Map one SDK message onto the upstream variants, or None to drop it."""
    if isinstance(msg, SDKStreamEvent):
        return StreamEvent(event=msg.event)

    if isinstance(msg, AssistantMessage):
        blocks: list[ContentBlock] = []
        for block in msg.content:
            if isinstance(block, SDKToolUseBlock):
                blocks.append(ToolUseBlock(name=block.name, id=block.id))
            elif isinstance(block, SDKTextBlock):
                blocks.append(TextBlock(text=block.text))
        return AssistantTurn(content=blocks)

    if isinstance(msg, ResultMessage):
        return Result(subtype=msg.subtype)

    # Tool heartbeats carrying the CLI's tool_progress payload. Current SDK
    # parsers skip top-level tool_progress messages, so this fires only when
    # an SDK surfaces them as system messages.
    if isinstance(msg, SystemMessage) and msg.subtype == "tool_progress":
        data = msg.data or {}
        return ToolProgress(
            tool_name=data.get("tool_name", ""),
            elapsed_seconds=data.get("elapsed_time_seconds", 0),
        )

    return None


class AgentClient:
    """Thin wrapper around `claude_agent_sdk.query`."""

    def __init__(self, settings: Settings):
        self.settings = settings

    async def stream(
        self, prompt: str, profile: AgentProfile
    ) -> AsyncGenerator[UpstreamMessage, None]:
        """Yield upstream messages until the SDK iteration ends."""
        options = build_options(profile, self.settings)
        logger.info(
            "Starting agent query (max_turns=%s, tools=%s, model=%s)",
            profile.max_turns,
            profile.tools,
            profile.model or "default",
        )
        # The SDK generator owns the CLI subprocess; close it with ours
        async with aclosing(query(prompt=prompt, options=options)) as messages:
            async for msg in messages:
                normalized = normalize_message(msg)
                if normalized is not None:
                    yield normalized
