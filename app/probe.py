"""Duration probe backed by mutagen.

Reads only the container header of an in-memory blob.  Never raises:
anything mutagen cannot read resolves to ``None``.
"""

from __future__ import annotations

import asyncio
import io
import logging
from typing import Optional

from mutagen import File as MutagenFile
from mutagen import MutagenError

from app.resources import ResourceHandle, StaleHandleError

logger = logging.getLogger(__name__)


def read_duration(data: bytes) -> Optional[float]:
    """Return the stream length in seconds, or None if unreadable."""
    try:
        audio_file = MutagenFile(io.BytesIO(data))
    except (MutagenError, OSError, ValueError) as exc:
        logger.debug("mutagen could not parse blob: %s", exc)
        return None
    if audio_file is None or not hasattr(audio_file, "info"):
        return None
    return getattr(audio_file.info, "length", None)


async def probe_duration(handle: ResourceHandle) -> Optional[float]:
    """Async probe over a resource handle, run off the event loop."""
    try:
        data = handle.data
    except StaleHandleError:
        return None
    return await asyncio.to_thread(read_duration, data)
