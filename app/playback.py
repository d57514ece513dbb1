"""Playback coordinator — single active track with best-effort media calls.

The coordinator owns one piece of state, the active track id.  ``toggle``
updates it in a single synchronous step and *schedules* the play/pause
requests on the running loop; it never waits for them.  A request that
fails later (released handle, autoplay policy, ...) is logged and dropped.
The next toggle of the same track reconciles against what the handle
reports, so a drifted state heals itself.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Optional, Protocol

from app.resources import StaleHandleError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Media handle contract
# ---------------------------------------------------------------------------

class MediaHandle(Protocol):
    """What the coordinator needs from a playable media element."""

    @property
    def paused(self) -> bool: ...

    async def play(self) -> None: ...

    async def pause(self) -> None: ...


# ---------------------------------------------------------------------------
# Coordinator states
# ---------------------------------------------------------------------------

class PlaybackStatus(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"


class PlaybackCoordinator:
    """Enforces that at most one media handle is asked to play at a time."""

    def __init__(self) -> None:
        self.active_track_id: Optional[str] = None
        self._active_handle: Optional[MediaHandle] = None
        self._pending: set[asyncio.Task] = set()

    @property
    def status(self) -> PlaybackStatus:
        if self.active_track_id is None:
            return PlaybackStatus.IDLE
        return PlaybackStatus.PLAYING

    def to_status_dict(self) -> dict:
        """Serialize for the status API."""
        return {
            "state": self.status.value,
            "active_track_id": self.active_track_id,
        }

    # -----------------------------------------------------------------------
    # Transitions
    # -----------------------------------------------------------------------

    def toggle(self, track_id: str, handle: MediaHandle) -> Optional[str]:
        """Play/pause *track_id* and return the new active id (or None).

        Must be called from inside the running event loop; otherwise raises
        ``RuntimeError`` before touching any state or handle.
        """
        asyncio.get_running_loop()
        previous = self._active_handle
        if previous is not None and previous is not handle:
            self._request(previous.pause, "pause", self.active_track_id)

        if self.active_track_id == track_id:
            if not handle.paused:
                self._request(handle.pause, "pause", track_id)
                self._set_active(None, None)
            else:
                # Paused behind our back; resume instead of stopping.
                self._request(handle.play, "play", track_id)
                self._set_active(track_id, handle)
            return self.active_track_id

        self._request(handle.play, "play", track_id)
        self._set_active(track_id, handle)
        return self.active_track_id

    def discard(self, track_id: str) -> None:
        """Forget *track_id* (removed from the store); stops it if active."""
        if self.active_track_id != track_id:
            return
        if self._active_handle is not None:
            self._request(self._active_handle.pause, "pause", track_id)
        self._set_active(None, None)

    async def settle(self) -> None:
        """Wait for every outstanding play/pause request to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def aclose(self) -> None:
        if self._active_handle is not None:
            self._request(self._active_handle.pause, "pause", self.active_track_id)
        self._set_active(None, None)
        await self.settle()

    # -----------------------------------------------------------------------
    # Internals
    # -----------------------------------------------------------------------

    def _set_active(self, track_id: Optional[str], handle: Optional[MediaHandle]) -> None:
        self.active_track_id = track_id
        self._active_handle = handle
        logger.debug("Active track → %s", track_id)

    def _request(
        self,
        action: Callable[[], Awaitable[None]],
        name: str,
        track_id: Optional[str],
    ) -> None:
        """Fire a media request without waiting; tasks start in issue order.

        Must be called from inside the running event loop.
        """
        task = asyncio.create_task(self._run_request(action, name, track_id))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _run_request(
        self,
        action: Callable[[], Awaitable[None]],
        name: str,
        track_id: Optional[str],
    ) -> None:
        try:
            await action()
        except StaleHandleError:
            logger.debug("Ignoring %s on released handle for track %s", name, track_id)
        except Exception:
            logger.warning("%s request failed for track %s", name.capitalize(), track_id, exc_info=True)
