"""Query responder — keyword intents over the loaded track set, no I/O.

Provides:
- Intent classification (ordered keyword table, first match wins)
- One renderer per intent: summary, playlist, vibe check, transitions
- A generic "here is what I see" fallback

Responses use ``"\\n"`` as the line separator; the UI must render each
one as a literal line break.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, List, Sequence, Tuple

from core.insight import TEMPO_LABELS, format_clock, total_seconds
from core.models import TrackInsight
from core.stats import dominant_moods, rank_moods, tempo_split

NO_TRACKS_MESSAGE = (
    "I don't have any tracks yet. Upload a few Suno exports and I'll break "
    "down the runtime, moods and flow for you."
)


class Intent(str, Enum):
    SUMMARY = "summary"
    PLAYLIST = "playlist"
    VIBE = "vibe"
    TRANSITION = "transition"
    FALLBACK = "fallback"


# Order matters: "playlist flow" is a playlist question, not a transition one.
INTENT_KEYWORDS: Tuple[Tuple[Intent, Tuple[str, ...]], ...] = (
    (Intent.SUMMARY, ("summary", "summarize", "summarise", "overview", "recap", "stats", "breakdown")),
    (Intent.PLAYLIST, ("playlist", "order", "sequence", "setlist", "queue")),
    (Intent.VIBE, ("vibe", "mood", "feel", "emotion", "energy")),
    (Intent.TRANSITION, ("transition", "flow", "segue", "mix", "blend")),
)


def classify(question: str) -> Intent:
    """Map free text to an :class:`Intent` by case-insensitive substring."""
    text = question.lower()
    for intent, keywords in INTENT_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return intent
    return Intent.FALLBACK


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def _join_moods(moods: Sequence[str]) -> str:
    if len(moods) <= 1:
        return "".join(moods)
    return ", ".join(moods[:-1]) + f" & {moods[-1]}"


def _tempo_rank(insight: TrackInsight) -> int:
    return TEMPO_LABELS.index(insight.tempo)


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------

def render_summary(insights: Sequence[TrackInsight]) -> str:
    dominant = dominant_moods(insights)
    label = "Dominant mood" if len(dominant) == 1 else "Dominant moods"
    spread = " • ".join(f"{mood} ×{count}" for mood, count in rank_moods(insights)[:3])
    split = tempo_split(insights)
    energy = " • ".join(f"{split[t]} {t}" for t in TEMPO_LABELS)

    lines = [
        f"Here's the rundown on your {_plural(len(insights), 'track')}:",
        f"• Total runtime: {format_clock(total_seconds(insights))}",
        f"• {label}: {_join_moods(dominant)}",
        f"• Mood spread: {spread}",
        f"• Energy split: {energy}",
    ]
    return "\n".join(lines)


def render_playlist(insights: Sequence[TrackInsight]) -> str:
    # sorted() is stable, so upload order survives inside each bucket.
    ordered = sorted(insights, key=_tempo_rank)
    lines = ["Here's a playlist that builds from low to high energy:"]
    for position, insight in enumerate(ordered, start=1):
        lines.append(f"{position}. {insight.title} ({insight.tempo} energy)")
    return "\n".join(lines)


def render_vibe(insights: Sequence[TrackInsight]) -> str:
    lines = ["Vibe check:"]
    for insight in insights:
        lines.append(f"• {insight.title}: {', '.join(insight.moods)} ({insight.tempo} energy)")
    return "\n".join(lines)


def render_transition(insights: Sequence[TrackInsight]) -> str:
    if len(insights) < 2:
        return (
            f"Only {insights[0].title} is loaded, so there's nothing to transition "
            "into yet. Add another track and I'll map the flow."
        )

    lines = ["Transition plan in the current order:"]
    for current, following in zip(insights, insights[1:]):
        step = _tempo_rank(following) - _tempo_rank(current)
        if step == 0:
            note = f"smooth hand-off, both sit at {current.tempo} energy"
        elif step > 0:
            note = (
                f"energy lift from {current.tempo} to {following.tempo}, "
                "cut in on a downbeat"
            )
        else:
            note = (
                f"energy drop from {current.tempo} to {following.tempo}, "
                "ease it down with a longer crossfade"
            )
        shared = [m for m in current.moods if m in following.moods]
        if shared:
            note += f"; shared {_join_moods(shared)} mood keeps it glued"
        lines.append(f"• {current.title} → {following.title}: {note}")
    return "\n".join(lines)


def render_fallback(insights: Sequence[TrackInsight]) -> str:
    dominant = dominant_moods(insights)
    return "\n".join(
        [
            (
                f"Here's what I see: {_plural(len(insights), 'track')}, "
                f"{format_clock(total_seconds(insights))} of runtime, "
                f"leaning {_join_moods(dominant)}."
            ),
            "Ask me for a summary, a playlist order, a vibe check, or a transition plan.",
        ]
    )


_RENDERERS: Dict[Intent, Callable[[Sequence[TrackInsight]], str]] = {
    Intent.SUMMARY: render_summary,
    Intent.PLAYLIST: render_playlist,
    Intent.VIBE: render_vibe,
    Intent.TRANSITION: render_transition,
    Intent.FALLBACK: render_fallback,
}


# ---------------------------------------------------------------------------
# High-level entry point
# ---------------------------------------------------------------------------

def respond(question: str, insights: Sequence[TrackInsight]) -> str:
    """Answer *question* about *insights*.  Always returns non-empty text."""
    if not insights:
        return NO_TRACKS_MESSAGE
    snapshot: List[TrackInsight] = list(insights)
    return _RENDERERS[classify(question)](snapshot)
