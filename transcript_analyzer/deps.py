"""FastAPI dependencies — per-process collaborators held on app.state."""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse

from transcript_analyzer.agent import AgentClient
from transcript_analyzer.config import Settings
from transcript_analyzer.gong import GongClient
from transcript_analyzer.models import ErrorResponse


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_agent(request: Request) -> AgentClient:
    return request.app.state.agent


def get_gong(request: Request) -> GongClient:
    return request.app.state.gong


def error_response(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    """JSON error body used by every non-streaming failure."""
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
    )
