"""Playback routes: play/pause toggles for the browser player.

The client sends its player's current paused flag with each toggle; the
response carries the new active track and the play/pause commands the
client must apply, in order.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.client_media import ClientPlaybackBridge
from app.deps import get_bridge, get_session
from app.session import AgentSession

router = APIRouter(prefix="/playback", tags=["playback"])


class ToggleRequest(BaseModel):
    paused: Optional[bool] = None  # None: trust the last known state


@router.get("")
async def playback_status(session: AgentSession = Depends(get_session)):
    return JSONResponse(session.playback.to_status_dict())


@router.post("/{track_id}/toggle")
async def toggle(
    track_id: str,
    body: Optional[ToggleRequest] = None,
    session: AgentSession = Depends(get_session),
    bridge: ClientPlaybackBridge = Depends(get_bridge),
):
    """Play or pause *track_id*, pausing whatever else was active."""
    if session.store.get(track_id) is None:
        raise HTTPException(status_code=404, detail="Track not found")

    handle = bridge.handle_for(track_id)
    if body is not None and body.paused is not None:
        handle.paused = body.paused

    session.toggle(track_id, handle)
    await session.playback.settle()

    payload = session.playback.to_status_dict()
    payload["commands"] = bridge.drain()
    return JSONResponse(payload)
