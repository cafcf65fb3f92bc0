"""Data Transfer Objects for wire and storage formats.

These Pydantic models describe the provider APIs and the JSON records kept
in the key-value store. Payloads are validated here so that untyped JSON
never travels past the adapters.

Internal domain logic should use entities from the entities package.
"""

from .records import CachedResponseRecord, ConversationRecordDTO, MessageRecord, TurnRecord
from .requests import GroqChatRequest, GroqMessage, YelpChatRequest, YelpUserContext
from .responses import (
    GroqChatResponse,
    GroqChoice,
    ProviderErrorBody,
    YelpChatResponse,
    YelpResponseText,
)

__all__ = [
    "CachedResponseRecord",
    "ConversationRecordDTO",
    "MessageRecord",
    "TurnRecord",
    "GroqMessage",
    "GroqChatRequest",
    "GroqChoice",
    "GroqChatResponse",
    "YelpUserContext",
    "YelpChatRequest",
    "YelpResponseText",
    "YelpChatResponse",
    "ProviderErrorBody",
]
