"""Pydantic models: the request/response contract with the frontend.

SSE payload shapes live in events.py; raw Gong API shapes live in gong.py.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictStr


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class AnalyzeTranscriptRequest(BaseModel):
    """POST /api/analyze-transcript request body."""
    transcript: StrictStr = Field(min_length=1)


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: StrictStr


class ResearchRequest(BaseModel):
    """POST /api/competitive-research request body."""
    messages: list[ChatMessage]
    model: StrictStr | None = None


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------

class ErrorResponse(BaseModel):
    """Body of every non-streaming error response."""
    error: str
    details: str | None = None


class HealthResponse(BaseModel):
    """GET /api/health response."""
    status: Literal["ok", "degraded"]
    version: str = "0.1.0"
    anthropic_configured: bool
    gong_configured: bool


class UserSummary(BaseModel):
    id: str
    name: str
    email: str


class UsersResponse(BaseModel):
    """GET /api/gong/users response."""
    users: list[UserSummary]


class PartySummary(BaseModel):
    name: str | None = None
    email: str | None = None
    affiliation: str | None = None


class CallSummary(BaseModel):
    id: str
    title: str
    date: str  # YYYY-MM-DD
    duration: float
    url: str | None = None
    started: str
    parties: list[PartySummary] = Field(default_factory=list)


class CallsResponse(BaseModel):
    """GET /api/gong/calls response."""
    calls: list[CallSummary]
    total: int


class TranscriptResponse(BaseModel):
    """GET /api/gong/transcript response."""
    model_config = ConfigDict(populate_by_name=True)

    call_id: str = Field(alias="callId")
    transcript: str
    raw_transcript: dict[str, Any] = Field(alias="rawTranscript")
    call_details: dict[str, Any] | None = Field(default=None, alias="callDetails")
