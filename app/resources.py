"""Resource registry for transient media blobs.

Every uploaded file gets one :class:`ResourceHandle`.  The registry is
owned by a session and passed in explicitly; it is the only place handles
are created or freed, so a leak or double release shows up in its
counters.
"""

from __future__ import annotations

import logging
import uuid

logger = logging.getLogger(__name__)


class StaleHandleError(Exception):
    """Raised when a released handle is used."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Resource {key} has already been released")


class ResourceHandle:
    """Opaque reference to an in-memory media blob."""

    __slots__ = ("key", "mime_type", "size", "_data", "released")

    def __init__(self, key: str, data: bytes, mime_type: str = ""):
        self.key = key
        self.mime_type = mime_type
        self.size = len(data)
        self._data: bytes | None = data
        self.released = False

    @property
    def data(self) -> bytes:
        if self._data is None:
            raise StaleHandleError(self.key)
        return self._data

    def _free(self) -> None:
        self._data = None
        self.released = True

    def __repr__(self) -> str:
        state = "released" if self.released else "live"
        return f"<ResourceHandle {self.key} {state}>"


class ResourceRegistry:
    """Creates and frees :class:`ResourceHandle` objects exactly once."""

    def __init__(self) -> None:
        self._live: dict[str, ResourceHandle] = {}
        self.acquired_count = 0
        self.released_count = 0

    def __len__(self) -> int:
        return len(self._live)

    def __contains__(self, handle: object) -> bool:
        return isinstance(handle, ResourceHandle) and handle.key in self._live

    def acquire(self, data: bytes, mime_type: str = "") -> ResourceHandle:
        handle = ResourceHandle(f"blob:{uuid.uuid4()}", data, mime_type)
        self._live[handle.key] = handle
        self.acquired_count += 1
        logger.debug("Acquired %s (%d bytes)", handle.key, handle.size)
        return handle

    def get(self, key: str) -> ResourceHandle | None:
        return self._live.get(key)

    def release(self, handle: ResourceHandle) -> bool:
        """Free *handle*.  Returns False if it was already released."""
        if self._live.pop(handle.key, None) is None:
            return False
        handle._free()
        self.released_count += 1
        logger.debug("Released %s", handle.key)
        return True

    def release_all(self) -> int:
        """Free every live handle and return how many were freed."""
        handles = list(self._live.values())
        for handle in handles:
            self.release(handle)
        return len(handles)
