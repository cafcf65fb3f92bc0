"""Facts provider answer entity."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class FactsAnswer:
    """Answer returned by the restaurant-facts provider.

    Attributes:
        text: The answer text
        tags: Span annotations returned with the text (business, highlight)
        chat_id: Provider conversation id, usable for follow-up questions
    """

    text: str
    tags: tuple[dict[str, Any], ...] = field(default_factory=tuple)
    chat_id: str | None = None
