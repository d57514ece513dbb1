"""Append-only conversation log of agent and user turns."""

from __future__ import annotations

import itertools
import uuid
from typing import Optional, Sequence

from core.models import Message, Role, TrackInsight
from core.responder import respond

WELCOME_MESSAGE = (
    "Upload your Suno AI creations and ask me for a summary, playlist flow, "
    "or vibe check. I'll decode the set in seconds."
)


def batch_announcement(count: int) -> str:
    noun = "tracks" if count > 1 else "track"
    return f"Loaded {count} Suno {noun}. Ask for a summary, playlist, or vibe breakdown."


class Conversation:
    """Holds the message history; each question yields exactly one reply."""

    def __init__(self, *, greeting: Optional[str] = WELCOME_MESSAGE):
        self._messages: list[Message] = []
        self._clock = itertools.count(1)
        if greeting:
            self._append("agent", greeting)

    def __len__(self) -> int:
        return len(self._messages)

    @property
    def messages(self) -> list[Message]:
        return list(self._messages)

    def _new_message(self, role: Role, content: str) -> Message:
        return Message(
            id=uuid.uuid4().hex,
            role=role,
            content=content,
            timestamp=next(self._clock),
        )

    def _append(self, role: Role, content: str) -> Message:
        message = self._new_message(role, content)
        self._messages.append(message)
        return message

    def announce_batch(self, count: int) -> Optional[Message]:
        """Post the "Loaded N tracks" note; nothing for an empty batch."""
        if count <= 0:
            return None
        return self._append("agent", batch_announcement(count))

    def ask(
        self, question: str, insights: Sequence[TrackInsight]
    ) -> Optional[tuple[Message, Message]]:
        """Record a question and its answer.  Blank input is ignored."""
        question = question.strip()
        if not question:
            return None
        user_message = self._new_message("user", question)
        agent_message = self._new_message("agent", respond(question, insights))
        # Both turns land together.
        self._messages.extend([user_message, agent_message])
        return user_message, agent_message
