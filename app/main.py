"""FastAPI application entry point (local shell for the agent session)."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from app.client_media import ClientPlaybackBridge
from app.config import get_settings
from app.log import setup_logging
from app.session import AgentSession

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle hook."""
    settings = get_settings()
    setup_logging(settings.log_level)
    app.state.session = AgentSession(settings=settings)
    app.state.bridge = ClientPlaybackBridge()
    logger.info("[startup] Agent session ready")
    try:
        yield
    finally:
        await app.state.session.aclose()
        app.state.session = None
        app.state.bridge = None
        logger.info("[shutdown] Agent session closed")


app = FastAPI(
    title="suno-companion",
    version="0.1.0",
    lifespan=lifespan,
)

# Routers
from app.routes_agent import router as agent_router  # noqa: E402
from app.routes_playback import router as playback_router  # noqa: E402
from app.routes_tracks import router as tracks_router  # noqa: E402

app.include_router(tracks_router)
app.include_router(agent_router)
app.include_router(playback_router)


@app.get("/health")
async def health():
    """Simple health-check endpoint."""
    return JSONResponse({"status": "ok", "version": app.version})
