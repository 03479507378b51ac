"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import AsyncGenerator, Callable

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from transcript_analyzer.agent import AgentProfile
from transcript_analyzer.config import Settings
from transcript_analyzer.gong import GongClient
from transcript_analyzer.main import create_app
from transcript_analyzer.upstream import (
    AssistantTurn,
    Result,
    StreamEvent,
    ToolProgress,
    ToolUseBlock,
    UpstreamMessage,
)


# ---------------------------------------------------------------------------
# Upstream message helpers
# ---------------------------------------------------------------------------


def text_delta(text: str) -> StreamEvent:
    return StreamEvent(
        event={
            "type": "content_block_delta",
            "index": 0,
            "delta": {"type": "text_delta", "text": text},
        }
    )


def tool_use(*names: str) -> AssistantTurn:
    return AssistantTurn(
        content=[ToolUseBlock(name=name, id=f"tool-{i}") for i, name in enumerate(names)]
    )


def tool_progress(name: str, elapsed: float) -> ToolProgress:
    return ToolProgress(tool_name=name, elapsed_seconds=elapsed)


def result(subtype: str = "success") -> Result:
    return Result(subtype=subtype)


async def iterate(
    messages: list[UpstreamMessage], error: Exception | None = None
) -> AsyncGenerator[UpstreamMessage, None]:
    for message in messages:
        yield message
    if error is not None:
        raise error


class FakeAgent:
    """Stands in for AgentClient; yields canned messages.

    Calls are recorded when the stream is requested, before any iteration.
    """

    def __init__(self) -> None:
        self.messages: list[UpstreamMessage] = [
            text_delta("Hello from Claude!"),
            result(),
        ]
        self.error: Exception | None = None
        self.calls: list[tuple[str, AgentProfile]] = []

    def stream(self, prompt: str, profile: AgentProfile) -> AsyncGenerator[UpstreamMessage, None]:
        self.calls.append((prompt, profile))
        return iterate(self.messages, self.error)


def parse_frames(raw: str) -> list[str]:
    """Split an SSE body into the payloads of its `data:` lines."""
    return [
        frame[len("data: "):]
        for frame in raw.split("\n\n")
        if frame.startswith("data: ")
    ]


# ---------------------------------------------------------------------------
# App fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def reset_sse_app_status():
    """sse_starlette may keep a process-wide exit event bound to the first loop."""
    import sse_starlette.sse as sse_module

    app_status = getattr(sse_module, "AppStatus", None)
    if app_status is None or not hasattr(app_status, "should_exit_event"):
        yield
        return
    app_status.should_exit_event = None
    yield
    app_status.should_exit_event = None


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        anthropic_api_key="test-key",
        gong_access_key="gong-key",
        gong_access_key_secret="gong-secret",
        gong_api_base_url="https://gong.test/v2",
    )


@pytest.fixture
def fake_agent() -> FakeAgent:
    return FakeAgent()


@pytest.fixture
def gong_routes() -> dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]]:
    """(method, path) → handler map served by the mocked Gong API."""
    return {}


@pytest.fixture
def gong_requests() -> list[httpx.Request]:
    return []


@pytest.fixture
def gong_transport(gong_routes, gong_requests) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        gong_requests.append(request)
        route = gong_routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, text="no such route")
        return route(request)

    return httpx.MockTransport(handler)


@pytest.fixture
def make_client(fake_agent, gong_transport):
    """Factory for an HTTP client against an app built from given settings."""

    def _make(app_settings: Settings) -> AsyncClient:
        app = create_app(
            app_settings,
            agent=fake_agent,
            gong_client=GongClient(app_settings, transport=gong_transport),
        )
        return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")

    return _make


@pytest.fixture
async def client(make_client, settings) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for testing FastAPI endpoints."""
    async with make_client(settings) as ac:
        yield ac
