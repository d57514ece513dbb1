"""Collection-level aggregates shared by the stats panel and the responder."""

from __future__ import annotations

from collections import Counter
from typing import Dict, List, Sequence, Tuple

from core.insight import TEMPO_LABELS, format_clock, total_seconds
from core.models import CollectionStats, TrackInsight


def rank_moods(insights: Sequence[TrackInsight]) -> List[Tuple[str, int]]:
    """Mood frequencies, most common first; ties keep first-seen order."""
    counts: Counter = Counter()
    for insight in insights:
        counts.update(insight.moods)
    # Counter preserves insertion order and sorted() is stable.
    return sorted(counts.items(), key=lambda item: -item[1])


def dominant_moods(insights: Sequence[TrackInsight]) -> List[str]:
    """Every mood tied for the highest count, in first-seen order."""
    ranked = rank_moods(insights)
    if not ranked:
        return []
    top = ranked[0][1]
    return [mood for mood, count in ranked if count == top]


def tempo_split(insights: Sequence[TrackInsight]) -> Dict[str, int]:
    split = {label: 0 for label in TEMPO_LABELS}
    for insight in insights:
        split[insight.tempo] += 1
    return split


def collection_stats(insights: Sequence[TrackInsight]) -> CollectionStats:
    """Runtime, disk footprint and top moods for the loaded set."""
    if not insights:
        return CollectionStats()

    total_mb = sum(i.size for i in insights) / (1024 * 1024)
    return CollectionStats(
        track_count=len(insights),
        total_duration=format_clock(total_seconds(insights)),
        total_size_mb=f"{total_mb:.1f}",
        top_moods=[f"{mood} ×{count}" for mood, count in rank_moods(insights)[:3]],
    )
