"""Gong call-data endpoints — users, recent calls, transcripts."""

from __future__ import annotations

import logging
from collections.abc import Awaitable

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from transcript_analyzer.deps import error_response, get_gong
from transcript_analyzer.gong import GongAPIError, GongClient
from transcript_analyzer.models import UsersResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/gong")

NOT_CONFIGURED_MESSAGE = "GONG_ACCESS_KEY and GONG_ACCESS_KEY_SECRET are required"


def _not_configured() -> JSONResponse:
    logger.error("Gong API credentials not configured")
    return error_response(500, NOT_CONFIGURED_MESSAGE)


async def _respond(operation: str, call: Awaitable[BaseModel]) -> JSONResponse:
    """Await a Gong client call and render the result or the failure as JSON."""
    try:
        result = await call
    except GongAPIError as e:
        return error_response(e.status_code, e.message, e.details)
    except Exception as e:
        logger.exception("Error fetching Gong %s", operation)
        return error_response(500, "Internal server error", str(e))
    return JSONResponse(content=result.model_dump(mode="json", by_alias=True))


async def _users(gong: GongClient) -> UsersResponse:
    return UsersResponse(users=await gong.list_active_users())


@router.get("/users", response_model=None)
async def list_users(gong: GongClient = Depends(get_gong)) -> JSONResponse:
    if not gong.settings.gong_configured:
        return _not_configured()
    return await _respond("users", _users(gong))


@router.get("/calls", response_model=None)
async def list_calls(
    userId: str | None = None,
    limit: int = 10,
    gong: GongClient = Depends(get_gong),
) -> JSONResponse:
    """Recent calls where `userId` is the primary user."""
    if not gong.settings.gong_configured:
        return _not_configured()
    if not userId:
        logger.warning("Missing userId parameter in request")
        return error_response(400, "userId parameter is required")
    return await _respond("calls", gong.list_recent_calls(userId, limit))


@router.get("/transcript", response_model=None)
async def get_transcript(
    callId: str | None = None,
    gong: GongClient = Depends(get_gong),
) -> JSONResponse:
    if not gong.settings.gong_configured:
        return _not_configured()
    if not callId:
        logger.warning("Missing callId parameter in request")
        return error_response(400, "callId parameter is required")
    return await _respond("transcript", gong.get_transcript(callId))
