"""Cache entry domain entity."""

from dataclasses import dataclass
from enum import Enum


class PlanAction(str, Enum):
    """Actions offered by the plan copilot."""

    SUGGEST_TIMES = "suggest-times"
    DRAFT_INVITE = "draft-invite"
    MAKE_GROUP_FRIENDLY = "make-group-friendly"


class QueryKind(str, Enum):
    """Cacheable feature types.

    Each kind is its own cache namespace; the value is the key suffix used
    in the store.
    """

    WHY_THIS_TABLE = "why_this_table"
    TABLE_STARTER_INVITE = "table_starter_invite"
    PLAN_COPILOT_SUGGEST_TIMES = "plan_copilot_suggest-times"
    PLAN_COPILOT_DRAFT_INVITE = "plan_copilot_draft-invite"
    PLAN_COPILOT_MAKE_GROUP_FRIENDLY = "plan_copilot_make-group-friendly"

    @classmethod
    def for_plan_action(cls, action: PlanAction) -> "QueryKind":
        """Map a plan-copilot action to its cache namespace."""
        return cls(f"plan_copilot_{PlanAction(action).value}")


@dataclass(frozen=True)
class CacheEntryEntity:
    """Domain entity for a cached AI response.

    Attributes:
        entity_id: The restaurant the response belongs to
        kind: The feature that produced the response
        value: The response text
        produced_at: When the response was produced (Unix timestamp)
    """

    entity_id: str
    kind: QueryKind
    value: str
    produced_at: float

    def is_expired(self, now: float, ttl: float) -> bool:
        """Return True once the entry is older than ``ttl`` seconds."""
        return now - self.produced_at > ttl
