"""Health check endpoint."""

from fastapi import APIRouter, Depends

from transcript_analyzer.config import Settings
from transcript_analyzer.deps import get_settings
from transcript_analyzer.models import HealthResponse

router = APIRouter()


@router.get("/api/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    status = "ok" if settings.anthropic_configured else "degraded"
    return HealthResponse(
        status=status,
        anthropic_configured=settings.anthropic_configured,
        gong_configured=settings.gong_configured,
    )
