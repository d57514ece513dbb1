"""Media handles for players that live in the browser.

The HTTP shell cannot play audio itself.  Each track gets a
:class:`ClientMediaHandle` whose ``paused`` flag is whatever the client
last reported; ``play``/``pause`` turn into commands returned to the
client with the toggle response.
"""

from __future__ import annotations

from app.resources import StaleHandleError


class ClientMediaHandle:
    __slots__ = ("track_id", "paused", "stale", "_bridge")

    def __init__(self, track_id: str, bridge: "ClientPlaybackBridge"):
        self.track_id = track_id
        self.paused = True
        self.stale = False
        self._bridge = bridge

    async def play(self) -> None:
        self._send("play")
        self.paused = False

    async def pause(self) -> None:
        self._send("pause")
        self.paused = True

    def _send(self, action: str) -> None:
        if self.stale:
            raise StaleHandleError(self.track_id)
        self._bridge.commands.append({"track_id": self.track_id, "action": action})


class ClientPlaybackBridge:
    """One handle per track id plus the outbox of pending commands."""

    def __init__(self) -> None:
        self.handles: dict[str, ClientMediaHandle] = {}
        self.commands: list[dict[str, str]] = []

    def handle_for(self, track_id: str) -> ClientMediaHandle:
        handle = self.handles.get(track_id)
        if handle is None:
            handle = ClientMediaHandle(track_id, self)
            self.handles[track_id] = handle
        return handle

    def forget(self, track_id: str) -> None:
        handle = self.handles.pop(track_id, None)
        if handle is not None:
            handle.stale = True

    def drain(self) -> list[dict[str, str]]:
        commands, self.commands = self.commands, []
        return commands
