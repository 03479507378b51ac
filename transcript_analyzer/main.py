"""FastAPI application entry point."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from transcript_analyzer.agent import AgentClient
from transcript_analyzer.config import Settings
from transcript_analyzer.gong import GongClient
from transcript_analyzer.routes import analysis, gong, health, research


def create_app(
    settings: Settings | None = None,
    agent: AgentClient | None = None,
    gong_client: GongClient | None = None,
) -> FastAPI:
    """Build the app. Settings are read once here and shared via app.state."""
    settings = settings or Settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Transcript Analyzer",
        description="Gong call transcript analysis — Backend API",
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.agent = agent or AgentClient(settings)
    app.state.gong = gong_client or GongClient(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(analysis.router)
    app.include_router(research.router)
    app.include_router(gong.router)
    return app


app = create_app()
