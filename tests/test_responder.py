"""Tests for the query responder — pure logic, no I/O."""

from __future__ import annotations

import pytest

from core.models import TrackInsight
from core.responder import (
    NO_TRACKS_MESSAGE,
    Intent,
    classify,
    render_transition,
    respond,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _insight(title: str, *, tempo: str = "mid", moods=("dreamy",), duration=None) -> TrackInsight:
    return TrackInsight(
        id=title.lower(),
        title=title,
        duration=duration,
        size=1000,
        tempo=tempo,
        moods=list(moods),
    )


# ---------------------------------------------------------------------------
# Empty collection
# ---------------------------------------------------------------------------

class TestEmptyCollection:
    @pytest.mark.parametrize("question", ["give me a summary", "playlist?", "", "???"])
    def test_always_no_tracks_message(self, question):
        assert respond(question, []) == NO_TRACKS_MESSAGE


# ---------------------------------------------------------------------------
# classify
# ---------------------------------------------------------------------------

class TestClassify:
    def test_summary(self):
        assert classify("Give me a SUMMARY") == Intent.SUMMARY

    def test_playlist(self):
        assert classify("what order should I play these in") == Intent.PLAYLIST

    def test_vibe(self):
        assert classify("what's the vibe?") == Intent.VIBE

    def test_transition(self):
        assert classify("How should these flow?") == Intent.TRANSITION

    def test_earlier_intent_wins_ties(self):
        assert classify("playlist flow please") == Intent.PLAYLIST
        assert classify("summary of the vibe") == Intent.SUMMARY

    def test_fallback(self):
        assert classify("hello there") == Intent.FALLBACK
        assert classify("") == Intent.FALLBACK


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------

class TestSummary:
    def test_two_tracks_dominant_mood(self):
        insights = [
            _insight("One", moods=["dreamy", "upbeat"], duration=100),
            _insight("Two", moods=["dreamy", "dark"], duration=85),
        ]
        text = respond("give me a summary", insights)
        assert "2 tracks" in text
        assert "Dominant mood: dreamy" in text
        assert "Total runtime: 3:05" in text
        assert "\n" in text

    def test_tied_dominant_moods(self):
        insights = [_insight("One", moods=["chill"]), _insight("Two", moods=["dark"])]
        text = respond("summary", insights)
        assert "Dominant moods: chill & dark" in text

    def test_single_track_wording(self):
        text = respond("recap", [_insight("Solo")])
        assert "1 track:" in text


class TestPlaylist:
    def test_low_to_high_stable_within_bucket(self):
        insights = [
            _insight("A", tempo="high"),
            _insight("B", tempo="low"),
            _insight("C", tempo="mid"),
            _insight("D", tempo="low"),
        ]
        lines = respond("build me a playlist", insights).split("\n")
        assert lines[1:] == [
            "1. B (low energy)",
            "2. D (low energy)",
            "3. C (mid energy)",
            "4. A (high energy)",
        ]


class TestVibe:
    def test_lists_every_track_with_moods(self):
        insights = [_insight("A", moods=["dreamy", "dark"]), _insight("B", moods=["upbeat"])]
        text = respond("vibe check", insights)
        assert "A: dreamy, dark" in text
        assert "B: upbeat" in text


class TestTransition:
    def test_matched_buckets(self):
        insights = [_insight("A", tempo="mid"), _insight("B", tempo="mid")]
        text = respond("plan the transitions", insights)
        assert "A → B" in text
        assert "smooth hand-off" in text

    def test_mismatched_buckets(self):
        insights = [
            _insight("A", tempo="low", moods=["dark"]),
            _insight("B", tempo="high", moods=["upbeat"]),
            _insight("C", tempo="mid", moods=["chill"]),
        ]
        lines = respond("transition plan", insights).split("\n")
        assert "energy lift from low to high" in lines[1]
        assert "energy drop from high to mid" in lines[2]

    def test_shared_mood_is_mentioned(self):
        insights = [_insight("A", moods=["dreamy"]), _insight("B", moods=["dreamy"])]
        assert "shared dreamy mood" in render_transition(insights)

    def test_single_track(self):
        text = respond("transition?", [_insight("Solo")])
        assert "nothing to transition" in text


class TestFallback:
    def test_unmatched_question_gets_overview(self):
        text = respond("hello there", [_insight("A", duration=61)])
        assert text.startswith("Here's what I see: 1 track, 1:01 of runtime")
        assert "summary" in text

    def test_never_empty(self):
        for question in ("", "zzz", "12345"):
            assert respond(question, [_insight("A")])
