"""Storage DTOs for records persisted in the key-value store."""

from datetime import datetime

from pydantic import BaseModel, Field

from tabletalk_ai.entities import ChatMessage, ConversationRecord, ConversationTurn, Role


class CachedResponseRecord(BaseModel):
    """Serialized cache entry: the value and when it was produced."""

    value: str
    timestamp: float = Field(..., description="Unix timestamp when the value was produced")


class TurnRecord(BaseModel):
    role: Role
    content: str


class MessageRecord(BaseModel):
    id: str
    role: Role
    text: str
    timestamp: datetime


class ConversationRecordDTO(BaseModel):
    """Serialized conversation of one restaurant."""

    history: list[TurnRecord] = Field(default_factory=list)
    messages: list[MessageRecord] = Field(default_factory=list)
    timestamp: float = 0.0

    @classmethod
    def from_entity(cls, record: ConversationRecord) -> "ConversationRecordDTO":
        return cls(
            history=[TurnRecord(role=t.role, content=t.content) for t in record.history],
            messages=[
                MessageRecord(id=m.id, role=m.role, text=m.text, timestamp=m.timestamp)
                for m in record.messages
            ],
            timestamp=record.updated_at,
        )

    def to_entity(self, entity_id: str) -> ConversationRecord:
        return ConversationRecord(
            entity_id=entity_id,
            history=tuple(ConversationTurn(role=t.role, content=t.content) for t in self.history),
            messages=tuple(
                ChatMessage(id=m.id, role=m.role, text=m.text, timestamp=m.timestamp)
                for m in self.messages
            ),
            updated_at=self.timestamp,
        )
