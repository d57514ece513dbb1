"""Pydantic models shared across the application."""

from __future__ import annotations

from typing import Any, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

TempoLabel = Literal["low", "mid", "high"]
Role = Literal["agent", "user"]


class TrackInsight(BaseModel):
    """Derived, read-only view of a track used for display and querying."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    duration: Optional[float] = None  # seconds, None when unknown
    size: int = 0  # bytes
    tempo: TempoLabel = "mid"
    moods: Tuple[str, ...] = ()


class Track(BaseModel):
    """One uploaded audio file."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: str
    title: str
    size: int
    duration: Optional[float] = None
    mime_type: str = ""
    # Opaque playable-media handle; owned by the track, never serialized.
    handle: Any = Field(default=None, exclude=True, repr=False)
    insight: TrackInsight


class FileDescriptor(BaseModel):
    """A file offered for ingestion."""

    name: str
    mime_type: str = ""  # empty when the platform could not sniff it
    size: int = 0
    data: bytes = b""

    @property
    def extension(self) -> str:
        """Lower-case file extension without the dot, or ``""``."""
        _, dot, ext = self.name.rpartition(".")
        return ext.lower() if dot else ""


class Message(BaseModel):
    """One turn in the conversation log."""

    model_config = ConfigDict(frozen=True)

    id: str
    role: Role
    content: str  # may contain embedded "\n" line breaks
    timestamp: int  # ordering key only


class CollectionStats(BaseModel):
    """Aggregate figures shown above the track list."""

    track_count: int = 0
    total_duration: str = "0:00"
    total_size_mb: str = "0"
    top_moods: List[str] = Field(default_factory=list)  # e.g. ["dreamy ×2"]
