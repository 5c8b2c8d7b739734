"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class MessageRole(str, Enum):
    """Role tag attached to each message sent to the LLM."""

    SYSTEM = "system"
    USER = "user"


@dataclass(frozen=True, slots=True)
class ChatMessage:
    """A single role-tagged message in an LLM request."""

    role: MessageRole
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role.value, "content": self.content}


@dataclass(frozen=True, slots=True)
class ChatExchange:
    """A persisted prompt / response pair.

    ``id`` is assigned by the store on insert and is ``None`` before that.
    """

    prompt: str
    response: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: int | None = None


@dataclass(frozen=True, slots=True)
class TriviaOption:
    """One of the four answer options of a trivia question."""

    text: str
    is_correct: bool = False


@dataclass(frozen=True, slots=True)
class TriviaQuestion:
    """A multiple-choice trivia question (transient, never persisted)."""

    question: str
    options: tuple[TriviaOption, ...]

    def to_dict(self) -> dict[str, Any]:
        """Render in the wire shape the LLM is asked to produce."""
        return {
            "question": self.question,
            "options": [
                {"text": option.text, "isCorrect": option.is_correct}
                for option in self.options
            ],
        }
