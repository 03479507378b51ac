"""Competitive research endpoint — POST /api/competitive-research → SSE stream."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response
from pydantic import ValidationError

from transcript_analyzer.agent import AgentClient, AgentProfile
from transcript_analyzer.config import Settings
from transcript_analyzer.deps import error_response, get_agent, get_settings
from transcript_analyzer.models import ResearchRequest
from transcript_analyzer.prompts import build_research_prompt
from transcript_analyzer.relay import stream_response
from transcript_analyzer.translator import EventTranslator

logger = logging.getLogger(__name__)

router = APIRouter()

RESEARCH_FAILURE_MESSAGE = "Research query did not complete successfully"


@router.post("/api/competitive-research")
async def competitive_research(
    request: Request,
    settings: Settings = Depends(get_settings),
    agent: AgentClient = Depends(get_agent),
) -> Response:
    """Answer the latest user message with web-search-enabled research.

    Events emitted: text_delta, tool_start, tool_progress, done, error,
    then the [DONE] sentinel.
    """
    try:
        try:
            body = ResearchRequest.model_validate(await request.json())
        except ValidationError:
            logger.warning("Rejected research request without a messages array")
            return error_response(400, "Messages array is required")

        if not any(m.role == "user" for m in body.messages):
            return error_response(400, "No user message found")

        if not settings.anthropic_configured:
            logger.error("Anthropic API key not configured")
            return error_response(500, "ANTHROPIC_API_KEY is not configured")

        profile = AgentProfile(
            max_turns=settings.research_max_turns,
            tools="claude_code",
            model=body.model or settings.research_model,
        )
        messages = agent.stream(build_research_prompt(body.messages), profile)
        return stream_response(messages, EventTranslator(RESEARCH_FAILURE_MESSAGE))

    except Exception:
        logger.exception("Competitive research API error")
        return error_response(500, "Failed to process research request")
