"""Upstream provider protocols.

The primary provider is a general conversational LLM; the secondary
provider answers factual questions about restaurants. Both raise
ProviderError subclasses on failure and must return within a bounded time.
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from tabletalk_ai.entities import ConversationTurn, FactsAnswer


@runtime_checkable
class ChatProvider(Protocol):
    """Protocol for the conversational (primary) provider."""

    @property
    def name(self) -> str:
        """Short provider name used in logs and errors."""
        ...

    async def chat(
        self,
        system_prompt: str,
        history: Sequence[ConversationTurn],
        question: str,
        *,
        temperature: float = 0.7,
        max_tokens: int = 512,
    ) -> str:
        """Answer ``question`` given a system prompt and prior turns.

        Args:
            system_prompt: Instructions and context for the model
            history: Prior turns, oldest first
            question: The new user question
            temperature: Sampling temperature
            max_tokens: Upper bound on the answer length

        Returns:
            The answer text (never empty)

        Raises:
            ProviderError: On any failure
        """
        ...


@runtime_checkable
class FactsProvider(Protocol):
    """Protocol for the restaurant-facts (secondary) provider."""

    @property
    def name(self) -> str:
        """Short provider name used in logs and errors."""
        ...

    async def ask(
        self,
        query: str,
        *,
        locale: str | None = None,
        latitude: float | None = None,
        longitude: float | None = None,
        chat_id: str | None = None,
    ) -> FactsAnswer:
        """Ask a natural-language question.

        Args:
            query: The question, including the restaurant name
            locale: Locale of the user, defaults to the configured locale
            latitude: Optional latitude of the restaurant or user
            longitude: Optional longitude of the restaurant or user
            chat_id: Continue an earlier provider conversation

        Returns:
            The decoded answer

        Raises:
            ProviderError: On any failure
        """
        ...
