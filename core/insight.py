"""Insight synthesizer — pure business logic, no I/O.

Provides:
- Title sanitizing for uploaded file names
- Deterministic tempo / mood synthesis from a numeric seed
- Seeded waveform preview (same seed as the tempo label)
- Display formatters for durations and byte sizes

Nothing here analyses audio.  The "insight" is a stable function of the
track's title length and duration, so the same file always gets the same
badges.
"""

from __future__ import annotations

import math
import re
from typing import List, Optional, Sequence, Tuple

from core.models import TrackInsight

UNTITLED_TITLE = "Untitled Suno Track"

TEMPO_LABELS: Tuple[str, ...] = ("low", "mid", "high")

MOOD_VOCABULARY: Tuple[str, ...] = (
    "dreamy",
    "upbeat",
    "dark",
    "chill",
    "euphoric",
    "melancholic",
    "aggressive",
    "nostalgic",
)

# Must stay coprime with len(MOOD_VOCABULARY) so picks never repeat.
_MOOD_STRIDE = 3
_MAX_MOODS = 3

_EXTENSION_RE = re.compile(r"\.[^/.]+\Z")
_SEPARATOR_RE = re.compile(r"[_-]+")


# ---------------------------------------------------------------------------
# Titles
# ---------------------------------------------------------------------------

def sanitize_title(file_name: str, placeholder: str = UNTITLED_TITLE) -> str:
    """Turn ``"Neon_Drift.mp3"`` into ``"Neon Drift"``."""
    stem = _EXTENSION_RE.sub("", file_name)
    title = _SEPARATOR_RE.sub(" ", stem).strip()
    return title or placeholder


# ---------------------------------------------------------------------------
# Seeding
# ---------------------------------------------------------------------------

def clean_duration(duration: Optional[float]) -> Optional[float]:
    """Return *duration* if it is a usable number of seconds, else None."""
    if duration is None:
        return None
    try:
        value = float(duration)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value


def compute_seed(title: str, duration: Optional[float]) -> float:
    """The single seed behind tempo, moods and the waveform preview."""
    return len(title) + (clean_duration(duration) or 0)


def insight_seed(insight: TrackInsight) -> float:
    return compute_seed(insight.title, insight.duration)


def tempo_for_seed(seed: float) -> str:
    return TEMPO_LABELS[int(math.floor(seed)) % len(TEMPO_LABELS)]


def moods_for_seed(seed: float) -> Tuple[str, ...]:
    """Pick 1–3 distinct moods, in a fixed order, from *seed*."""
    base = int(math.floor(seed))
    count = 1 + base % _MAX_MOODS
    start = base % len(MOOD_VOCABULARY)
    return tuple(
        MOOD_VOCABULARY[(start + _MOOD_STRIDE * i) % len(MOOD_VOCABULARY)]
        for i in range(count)
    )


def waveform(seed: float, bars: int = 32) -> List[int]:
    """Decorative bar heights (percent, 8–60) derived from *seed*.

    Uses the same seed as :func:`tempo_for_seed` so the preview and the
    energy badge move together.
    """
    heights: List[int] = []
    for i in range(bars):
        wave = math.sin(seed * 0.1 + i * 0.7) + math.cos(seed * 0.05 + i)
        heights.append(max(8, min(60, round(30 + wave * 20))))
    return heights


# ---------------------------------------------------------------------------
# Synthesis
# ---------------------------------------------------------------------------

def synthesize(
    id: str,
    title: str,
    duration: Optional[float],
    size: int,
) -> TrackInsight:
    """Build the insight for one track.  Pure and total."""
    duration = clean_duration(duration)
    seed = compute_seed(title, duration)
    return TrackInsight(
        id=id,
        title=title,
        duration=duration,
        size=size,
        tempo=tempo_for_seed(seed),
        moods=moods_for_seed(seed),
    )


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def format_duration(seconds: Optional[float]) -> str:
    """``185`` → ``"3:05"``; missing or zero → ``"Unknown"``."""
    if not seconds or not math.isfinite(seconds):
        return "Unknown"
    return format_clock(seconds)


def format_clock(seconds: float) -> str:
    """Minutes and seconds, minutes unbounded (``"61:40"``)."""
    minutes = int(seconds // 60)
    remainder = int(seconds % 60)
    return f"{minutes}:{remainder:02d}"


def format_bytes(size: float) -> str:
    """Format a byte count with binary units, e.g. ``"4.0 MB"``."""
    if not math.isfinite(size):
        return "—"
    units = ["B", "KB", "MB", "GB"]
    index = 0
    value = float(size)
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    decimals = 0 if value >= 100 else 1
    return f"{value:.{decimals}f} {units[index]}"


def total_seconds(insights: Sequence[TrackInsight]) -> float:
    return sum(i.duration or 0 for i in insights)
