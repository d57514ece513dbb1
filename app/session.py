"""Agent session wiring the registry, store, coordinator and conversation.

The UI shell creates a session, feeds it file batches, questions and play
toggles, and closes it on teardown.  Closing stops playback and releases
every media handle.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from app.config import Settings, get_settings
from app.conversation import Conversation
from app.playback import MediaHandle, PlaybackCoordinator
from app.probe import probe_duration
from app.resources import ResourceRegistry
from app.store import DurationProbe, TrackStore
from core.models import CollectionStats, FileDescriptor, Message, Track
from core.stats import collection_stats

logger = logging.getLogger(__name__)


class AgentSession:
    def __init__(
        self,
        *,
        probe: DurationProbe = probe_duration,
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.registry = ResourceRegistry()
        self.store = TrackStore(self.registry, probe, settings=self.settings)
        self.playback = PlaybackCoordinator()
        self.conversation = Conversation()
        self.closed = False

    async def __aenter__(self) -> "AgentSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def upload(self, descriptors: Iterable[FileDescriptor]) -> list[Track]:
        """Ingest a batch and announce it in the conversation."""
        tracks = await self.store.ingest_batch(descriptors)
        self.conversation.announce_batch(len(tracks))
        return tracks

    def ask(self, question: str) -> Optional[tuple[Message, Message]]:
        return self.conversation.ask(question, self.store.insights())

    def toggle(self, track_id: str, handle: MediaHandle) -> Optional[str]:
        return self.playback.toggle(track_id, handle)

    def remove(self, track_id: str) -> bool:
        self.playback.discard(track_id)
        return self.store.remove(track_id)

    def stats(self) -> CollectionStats:
        return collection_stats(self.store.insights())

    async def aclose(self) -> None:
        """Stop playback and release every handle.  Idempotent."""
        if self.closed:
            return
        self.closed = True
        try:
            await self.playback.aclose()
        finally:
            await self.store.aclose()
        logger.info(
            "Session closed: %d acquired, %d released",
            self.registry.acquired_count,
            self.registry.released_count,
        )
