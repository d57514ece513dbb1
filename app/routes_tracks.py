"""Track routes for upload, listing, streaming and removal."""

from __future__ import annotations

from typing import Any, List

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import JSONResponse, Response

from app.client_media import ClientPlaybackBridge
from app.deps import get_bridge, get_session
from app.session import AgentSession
from core.insight import format_bytes, format_duration, insight_seed, waveform
from core.models import FileDescriptor, Track

router = APIRouter(prefix="/tracks", tags=["tracks"])


def _track_payload(track: Track, bars: int) -> dict[str, Any]:
    insight = track.insight
    return {
        "id": track.id,
        "title": track.title,
        "duration": track.duration,
        "size": track.size,
        "mime_type": track.mime_type,
        "tempo": insight.tempo,
        "moods": list(insight.moods),
        "duration_label": format_duration(insight.duration),
        "size_label": format_bytes(insight.size),
        "waveform": waveform(insight_seed(insight), bars),
        "audio_url": f"/tracks/{track.id}/audio",
    }


# ---------------------------------------------------------------------------
# GET /tracks
# ---------------------------------------------------------------------------

@router.get("")
async def list_tracks(session: AgentSession = Depends(get_session)):
    """All loaded tracks, newest batch first."""
    bars = session.settings.waveform_bars
    return JSONResponse({"tracks": [_track_payload(t, bars) for t in session.store.all()]})


# ---------------------------------------------------------------------------
# POST /tracks (multipart batch upload)
# ---------------------------------------------------------------------------

@router.post("")
async def upload_tracks(
    files: List[UploadFile] = File(...),
    session: AgentSession = Depends(get_session),
):
    """Ingest a batch.  Unsupported files are dropped without an error."""
    descriptors = []
    for upload in files:
        data = await upload.read()
        descriptors.append(
            FileDescriptor(
                name=upload.filename or "",
                mime_type=upload.content_type or "",
                size=len(data),
                data=data,
            )
        )

    tracks = await session.upload(descriptors)
    bars = session.settings.waveform_bars
    return JSONResponse(
        {
            "accepted": len(tracks),
            "skipped": len(descriptors) - len(tracks),
            "tracks": [_track_payload(t, bars) for t in tracks],
        }
    )


# ---------------------------------------------------------------------------
# GET /tracks/{track_id}/audio
# ---------------------------------------------------------------------------

@router.get("/{track_id}/audio")
async def track_audio(track_id: str, session: AgentSession = Depends(get_session)):
    """Serve the uploaded bytes so the browser player can load them."""
    track = session.store.get(track_id)
    if track is None:
        raise HTTPException(status_code=404, detail="Track not found")
    return Response(
        content=track.handle.data,
        media_type=track.mime_type or "application/octet-stream",
    )


# ---------------------------------------------------------------------------
# DELETE /tracks/{track_id}
# ---------------------------------------------------------------------------

@router.delete("/{track_id}")
async def delete_track(
    track_id: str,
    session: AgentSession = Depends(get_session),
    bridge: ClientPlaybackBridge = Depends(get_bridge),
):
    """Remove a track and release its media handle."""
    if not session.remove(track_id):
        raise HTTPException(status_code=404, detail="Track not found")
    await session.playback.settle()
    bridge.forget(track_id)
    return JSONResponse({"status": "removed", "id": track_id, "commands": bridge.drain()})
