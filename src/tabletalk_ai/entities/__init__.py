"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for wire or storage formats - use
DTOs from the dto package for that.
"""

from .cache_entry import CacheEntryEntity, PlanAction, QueryKind
from .conversation import ChatMessage, ConversationRecord, ConversationTurn, Role
from .facts import FactsAnswer
from .restaurant import PlanDraft, RestaurantSnapshot, TableStarter, UserPreferences

__all__ = [
    "CacheEntryEntity",
    "ChatMessage",
    "ConversationRecord",
    "ConversationTurn",
    "FactsAnswer",
    "PlanAction",
    "PlanDraft",
    "QueryKind",
    "RestaurantSnapshot",
    "Role",
    "TableStarter",
    "UserPreferences",
]
