"""Track store — newest-first collection of ingested tracks.

Ingestion of a batch:
  1. Drop files whose kind is not on the allow-list (silently)
  2. Acquire one resource handle per accepted file
  3. Probe every duration concurrently
  4. Synthesize insights
  5. Prepend the whole batch, in file order, once all probes settled
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Awaitable, Callable, Iterable, Optional, Sequence

from app.config import Settings, get_settings
from app.resources import ResourceHandle, ResourceRegistry
from core.insight import clean_duration, sanitize_title, synthesize
from core.models import FileDescriptor, Track, TrackInsight

logger = logging.getLogger(__name__)

DurationProbe = Callable[[ResourceHandle], Awaitable[Optional[float]]]


class TrackStore:
    """Owns the uploaded tracks and, through the registry, their handles."""

    def __init__(
        self,
        registry: ResourceRegistry,
        probe: DurationProbe,
        *,
        settings: Settings | None = None,
    ):
        self.registry = registry
        self.probe = probe
        self.settings = settings or get_settings()
        self._tracks: list[Track] = []

    async def __aenter__(self) -> "TrackStore":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def __len__(self) -> int:
        return len(self._tracks)

    # -----------------------------------------------------------------------
    # Filtering
    # -----------------------------------------------------------------------

    def accepts(self, descriptor: FileDescriptor) -> bool:
        """True if *descriptor* is an audio kind we can play."""
        mime = descriptor.mime_type.strip().lower()
        if mime:
            return mime in self.settings.allowed_mime_types
        return descriptor.extension in self.settings.allowed_extensions

    # -----------------------------------------------------------------------
    # Ingestion
    # -----------------------------------------------------------------------

    async def ingest_batch(self, descriptors: Iterable[FileDescriptor]) -> list[Track]:
        """Ingest a batch and return the new tracks in file order."""
        accepted: list[FileDescriptor] = []
        for descriptor in descriptors:
            if self.accepts(descriptor):
                accepted.append(descriptor)
            else:
                logger.debug(
                    "Skipping unsupported file %r (type=%r)",
                    descriptor.name,
                    descriptor.mime_type,
                )
        if not accepted:
            return []

        handles: list[ResourceHandle] = []
        try:
            for descriptor in accepted:
                handles.append(self.registry.acquire(descriptor.data, descriptor.mime_type))
            durations = await asyncio.gather(*(self._safe_probe(h) for h in handles))
            prepared = [
                self._build_track(descriptor, handle, duration)
                for descriptor, handle, duration in zip(accepted, handles, durations)
            ]
        except BaseException:
            for handle in handles:
                self.registry.release(handle)
            raise

        self._tracks = prepared + self._tracks
        logger.info("Ingested %d track(s), %d total", len(prepared), len(self._tracks))
        return prepared

    async def ingest(self, descriptor: FileDescriptor) -> Optional[Track]:
        """Ingest a single file; None if its kind is unsupported."""
        tracks = await self.ingest_batch([descriptor])
        return tracks[0] if tracks else None

    async def _safe_probe(self, handle: ResourceHandle) -> Optional[float]:
        """Run the probe; failures and timeouts mean "duration unknown"."""
        try:
            duration = await asyncio.wait_for(
                self.probe(handle), timeout=self.settings.probe_timeout_seconds
            )
        except asyncio.TimeoutError:
            logger.warning("Duration probe timed out for %s", handle.key)
            return None
        except Exception:
            logger.warning("Duration probe failed for %s", handle.key, exc_info=True)
            return None
        return clean_duration(duration)

    def _build_track(
        self,
        descriptor: FileDescriptor,
        handle: ResourceHandle,
        duration: Optional[float],
    ) -> Track:
        track_id = uuid.uuid4().hex
        title = sanitize_title(descriptor.name, self.settings.untitled_title)
        size = descriptor.size or len(descriptor.data)
        return Track(
            id=track_id,
            title=title,
            size=size,
            duration=duration,
            mime_type=descriptor.mime_type,
            handle=handle,
            insight=synthesize(track_id, title, duration, size),
        )

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------

    def all(self) -> list[Track]:
        """Tracks, newest batch first."""
        return list(self._tracks)

    def get(self, track_id: str) -> Optional[Track]:
        for track in self._tracks:
            if track.id == track_id:
                return track
        return None

    def insights(self) -> list[TrackInsight]:
        return [t.insight for t in self._tracks]

    # -----------------------------------------------------------------------
    # Removal / teardown
    # -----------------------------------------------------------------------

    def remove(self, track_id: str) -> bool:
        """Drop a track and release its handle.  False if unknown."""
        track = self.get(track_id)
        if track is None:
            return False
        self._tracks = [t for t in self._tracks if t.id != track_id]
        self.registry.release(track.handle)
        logger.info("Removed track %s", track_id)
        return True

    async def aclose(self) -> None:
        """Release every remaining handle."""
        tracks: Sequence[Track] = self._tracks
        self._tracks = []
        for track in tracks:
            self.registry.release(track.handle)
        logger.debug("Track store closed (%d handle(s) released)", len(tracks))
