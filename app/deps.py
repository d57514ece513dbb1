"""FastAPI dependencies for the per-process session objects."""

from __future__ import annotations

from fastapi import HTTPException, Request

from app.client_media import ClientPlaybackBridge
from app.session import AgentSession


def get_session(request: Request) -> AgentSession:
    """Return the session created in the lifespan hook."""
    session = getattr(request.app.state, "session", None)
    if session is None:
        raise HTTPException(status_code=503, detail="Session not ready")
    return session


def get_bridge(request: Request) -> ClientPlaybackBridge:
    bridge = getattr(request.app.state, "bridge", None)
    if bridge is None:
        raise HTTPException(status_code=503, detail="Session not ready")
    return bridge
