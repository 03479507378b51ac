"""Transcript analysis endpoint — POST /api/analyze-transcript → SSE stream."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response
from pydantic import ValidationError

from transcript_analyzer.agent import AgentClient, AgentProfile
from transcript_analyzer.config import Settings
from transcript_analyzer.deps import error_response, get_agent, get_settings
from transcript_analyzer.models import AnalyzeTranscriptRequest
from transcript_analyzer.prompts import build_analysis_prompt
from transcript_analyzer.relay import stream_response
from transcript_analyzer.translator import ANALYSIS_FAILURE_MESSAGE, EventTranslator

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/api/analyze-transcript")
async def analyze_transcript(
    request: Request,
    settings: Settings = Depends(get_settings),
    agent: AgentClient = Depends(get_agent),
) -> Response:
    """Analyze a call transcript, streaming the answer.

    Events emitted: text_delta, done, error, then the [DONE] sentinel.
    Validation and configuration failures are answered with plain JSON
    before any stream is opened.
    """
    try:
        try:
            body = AnalyzeTranscriptRequest.model_validate(await request.json())
        except ValidationError:
            logger.warning("Rejected analysis request without a transcript")
            return error_response(400, "Transcript is required")

        if not settings.anthropic_configured:
            logger.error("Anthropic API key not configured")
            return error_response(500, "ANTHROPIC_API_KEY is not configured")

        profile = AgentProfile(
            max_turns=settings.analysis_max_turns,
            tools="none",
            model=settings.analysis_model,
        )
        messages = agent.stream(build_analysis_prompt(body.transcript), profile)
        return stream_response(messages, EventTranslator(ANALYSIS_FAILURE_MESSAGE))

    except Exception:
        logger.exception("Transcript analysis API error")
        return error_response(
            500, "Failed to process transcript. Check server logs for details."
        )
