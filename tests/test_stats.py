"""Tests for collection stats (core/stats.py)."""

from __future__ import annotations

from core.models import CollectionStats, TrackInsight
from core.stats import collection_stats, dominant_moods, rank_moods, tempo_split


def _insight(id: str, moods, *, duration=None, size=0, tempo="mid") -> TrackInsight:
    return TrackInsight(id=id, title=id, duration=duration, size=size, tempo=tempo, moods=moods)


class TestRankMoods:
    def test_most_common_first(self):
        insights = [_insight("a", ["dreamy", "upbeat"]), _insight("b", ["dark", "dreamy"])]
        assert rank_moods(insights) == [("dreamy", 2), ("upbeat", 1), ("dark", 1)]

    def test_ties_keep_first_seen_order(self):
        insights = [_insight("a", ["chill"]), _insight("b", ["dark"]), _insight("c", ["dark", "chill"])]
        assert dominant_moods(insights) == ["chill", "dark"]

    def test_empty(self):
        assert rank_moods([]) == []
        assert dominant_moods([]) == []


class TestTempoSplit:
    def test_counts_every_bucket(self):
        insights = [_insight("a", ["x"], tempo="low"), _insight("b", ["x"], tempo="low")]
        assert tempo_split(insights) == {"low": 2, "mid": 0, "high": 0}


class TestCollectionStats:
    def test_empty_collection(self):
        assert collection_stats([]) == CollectionStats()
        assert collection_stats([]).total_duration == "0:00"
        assert collection_stats([]).top_moods == []

    def test_totals(self):
        insights = [
            _insight("a", ["dreamy"], duration=90, size=1024 * 1024),
            _insight("b", ["dreamy", "dark"], duration=95.5, size=1024 * 1024),
            _insight("c", ["upbeat"], duration=None, size=0),
        ]
        stats = collection_stats(insights)
        assert stats.track_count == 3
        assert stats.total_duration == "3:05"
        assert stats.total_size_mb == "2.0"
        assert stats.top_moods == ["dreamy ×2", "dark ×1", "upbeat ×1"]

    def test_top_moods_capped_at_three(self):
        insights = [_insight("a", ["a", "b", "c"]), _insight("b", ["d"])]
        assert len(collection_stats(insights).top_moods) == 3
