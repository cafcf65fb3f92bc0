"""Conversation domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ConversationTurn:
    """One role-tagged message of the provider-facing history."""

    role: Role
    content: str


@dataclass(frozen=True)
class ChatMessage:
    """A transcript line as displayed to the user.

    Attributes:
        id: Synthetic message identifier
        role: Who produced the message
        text: The displayed text
        timestamp: When the message was added to the transcript
    """

    id: str
    role: Role
    text: str
    timestamp: datetime


@dataclass(frozen=True)
class ConversationRecord:
    """Persisted conversation of one restaurant.

    Attributes:
        entity_id: The restaurant the conversation belongs to
        history: Provider-facing turns, oldest first
        messages: Transcript lines, oldest first (may include a welcome line
            that has no matching turn)
        updated_at: Last persistence time (Unix timestamp)
    """

    entity_id: str
    history: tuple[ConversationTurn, ...] = field(default_factory=tuple)
    messages: tuple[ChatMessage, ...] = field(default_factory=tuple)
    updated_at: float = 0.0
