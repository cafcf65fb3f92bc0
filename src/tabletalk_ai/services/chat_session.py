"""In-memory state of one restaurant conversation."""

from dataclasses import dataclass
from enum import Enum

from tabletalk_ai.entities import (
    ChatMessage,
    ConversationRecord,
    ConversationTurn,
    RestaurantSnapshot,
)


class SessionOrigin(str, Enum):
    """How a session was initialized."""

    HYDRATED = "hydrated"  # restored from a persisted record
    SEEDED = "seeded"  # started with the synthetic welcome message


class MessagePhase(str, Enum):
    IDLE = "idle"
    SENDING = "sending"


class TurnOutcome(str, Enum):
    ANSWERED = "answered"
    FAILED = "failed"
    DISCARDED = "discarded"


@dataclass(frozen=True)
class ChatReply:
    """Result of sending one message.

    Attributes:
        outcome: ANSWERED, FAILED (both providers down) or DISCARDED (the
            session was closed or superseded while the call was in flight)
        message: The assistant or error message added to the transcript, or
            None when discarded
        source: Name of the provider whose text was used, if any
    """

    outcome: TurnOutcome
    message: ChatMessage | None = None
    source: str | None = None


class ChatSession:
    """Conversation with one restaurant, as seen by one open screen.

    The session doubles as the cancellation token of its in-flight calls:
    once cancelled, results that arrive later are dropped instead of being
    applied to ``history``, ``messages`` or the store.
    """

    def __init__(
        self,
        restaurant: RestaurantSnapshot,
        history: list[ConversationTurn],
        messages: list[ChatMessage],
        origin: SessionOrigin,
    ) -> None:
        self.restaurant = restaurant
        self.history = history
        self.messages = messages
        self.origin = origin
        self.phase = MessagePhase.IDLE
        self._cancelled = False

    @property
    def entity_id(self) -> str:
        return self.restaurant.id

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Mark the session stale; pending results will be discarded."""
        self._cancelled = True

    def to_record(self) -> ConversationRecord:
        return ConversationRecord(
            entity_id=self.entity_id,
            history=tuple(self.history),
            messages=tuple(self.messages),
        )

    def __repr__(self) -> str:
        return (
            f"ChatSession(entity_id={self.entity_id!r}, origin={self.origin.value}, "
            f"turns={len(self.history)}, phase={self.phase.value}, cancelled={self._cancelled})"
        )
