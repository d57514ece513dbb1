"""Tests for the conversation log (app/conversation.py)."""

from __future__ import annotations

from app.conversation import WELCOME_MESSAGE, Conversation, batch_announcement
from core.models import TrackInsight
from core.responder import NO_TRACKS_MESSAGE


def _insight() -> TrackInsight:
    return TrackInsight(id="a", title="A", duration=60, size=1, tempo="mid", moods=["dreamy"])


class TestConversation:
    def test_starts_with_welcome(self):
        convo = Conversation()
        assert len(convo) == 1
        assert convo.messages[0].role == "agent"
        assert convo.messages[0].content == WELCOME_MESSAGE

    def test_greeting_can_be_disabled(self):
        assert len(Conversation(greeting=None)) == 0

    def test_ask_appends_one_user_and_one_agent_turn(self):
        convo = Conversation()
        user, agent = convo.ask("  give me a summary  ", [_insight()])
        assert user.role == "user"
        assert user.content == "give me a summary"
        assert agent.role == "agent"
        assert "1 track" in agent.content
        assert convo.messages[-2:] == [user, agent]
        assert len(convo) == 3

    def test_ask_without_tracks(self):
        _, agent = Conversation().ask("summary", [])
        assert agent.content == NO_TRACKS_MESSAGE

    def test_blank_question_is_ignored(self):
        convo = Conversation()
        assert convo.ask("   ", [_insight()]) is None
        assert len(convo) == 1

    def test_timestamps_are_increasing(self):
        convo = Conversation()
        convo.ask("hi", [])
        convo.announce_batch(2)
        stamps = [m.timestamp for m in convo.messages]
        assert stamps == sorted(stamps)
        assert len(set(stamps)) == len(stamps)

    def test_messages_is_a_copy(self):
        convo = Conversation()
        convo.messages.clear()
        assert len(convo) == 1


class TestBatchAnnouncement:
    def test_plural(self):
        assert batch_announcement(3).startswith("Loaded 3 Suno tracks.")

    def test_singular(self):
        assert batch_announcement(1).startswith("Loaded 1 Suno track.")

    def test_empty_batch_not_announced(self):
        convo = Conversation()
        assert convo.announce_batch(0) is None
        assert len(convo) == 1
