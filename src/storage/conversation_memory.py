"""Bounded chat transcript shared by the assistant endpoints.

Replies arrive asynchronously. Each turn takes a generation number from
``begin_turn``; ``complete_turn`` only records the reply when no newer turn
(or reset) happened in between, so a slow answer never lands after a fresher one.
"""
from __future__ import annotations

import threading
import time
from collections import deque
from typing import Deque, Literal, Optional

from pydantic import BaseModel, Field

Role = Literal["user", "assistant"]

MAX_MESSAGES = 50
DEFAULT_CONTEXT_MESSAGES = 8

# Topic -> words that flag it in a user message.
TOPIC_KEYWORDS = (
    ("tasks", ("task", "assignment", "homework")),
    ("calendar", ("meeting", "calendar", "event")),
    ("academics", ("course", "class", "study")),
    ("projects", ("project", "work")),
    ("scheduling", ("deadline", "due", "schedule")),
)


class ChatMessage(BaseModel):
    role: Role
    content: str
    timestamp: float = Field(default_factory=time.time)


class SessionSummary(BaseModel):
    message_count: int
    last_interaction: Optional[float] = None
    topics: list[str] = Field(default_factory=list)


def detect_topics(messages: list[ChatMessage]) -> list[str]:
    topics: list[str] = []
    for message in messages:
        if message.role != "user":
            continue
        content = message.content.lower()
        for topic, words in TOPIC_KEYWORDS:
            if topic not in topics and any(w in content for w in words):
                topics.append(topic)
    return topics


class ConversationMemory:
    def __init__(self, max_messages: int = MAX_MESSAGES):
        self.max_messages = max_messages
        self._messages: Deque[ChatMessage] = deque(maxlen=max_messages)
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def generation(self) -> int:
        return self._generation

    def messages(self) -> list[ChatMessage]:
        with self._lock:
            return list(self._messages)

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)

    def add_message(self, role: Role, content: str) -> None:
        with self._lock:
            self._append(ChatMessage(role=role, content=content))

    def begin_turn(self, user_text: str) -> int:
        """Record the user message and return the generation its reply must carry."""
        with self._lock:
            self._generation += 1
            self._append(ChatMessage(role="user", content=user_text))
            return self._generation

    def complete_turn(self, generation: int, reply: str) -> bool:
        """Append the reply unless a newer turn or a reset superseded it."""
        with self._lock:
            if generation != self._generation:
                return False
            self._append(ChatMessage(role="assistant", content=reply))
            return True

    def reset(self) -> None:
        with self._lock:
            self._messages.clear()
            self._generation += 1

    def context(self, max_messages: int = DEFAULT_CONTEXT_MESSAGES) -> str:
        recent = self.messages()[-max_messages:] if max_messages > 0 else []
        if not recent:
            return ""
        lines = [
            f"{'Human' if m.role == 'user' else 'Assistant'}: {m.content}" for m in recent
        ]
        return "Previous conversation context:\n" + "\n".join(lines) + "\n\n"

    def summary(self) -> SessionSummary:
        messages = self.messages()
        return SessionSummary(
            message_count=len(messages),
            last_interaction=messages[-1].timestamp if messages else None,
            topics=detect_topics(messages),
        )

    def _append(self, message: ChatMessage) -> None:
        self._messages.append(message)
