"""Service layer for business logic.

This layer contains the resolution logic and the stores it drives.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    UI -> ResolutionEngine -> ResponseCache / ConversationStore -> KeyValueStore
                           -> ChatProvider / FactsProvider

Usage:
    ```python
    from tabletalk_ai.services import ResolutionEngine

    # Using factory method (Redis + Groq + Yelp)
    engine = ResolutionEngine.create()

    # Or manual creation
    engine = ResolutionEngine(
        cache=ResponseCache(store),
        conversations=ConversationStore(store),
        chat_provider=chat,
        facts_provider=facts,
    )
    ```
"""

from .chat_session import ChatReply, ChatSession, MessagePhase, SessionOrigin, TurnOutcome
from .classifier import FACTUAL_KEYWORDS, QueryClassifier, QueryIntent, classify
from .conversation_store import ConversationStore
from .resolution_engine import CHAT_ERROR_MESSAGE, ResolutionEngine
from .response_cache import ResponseCache
from .templates import GENERIC_WHY_THIS_TABLE, TemplateFallbackGenerator

__all__ = [
    "CHAT_ERROR_MESSAGE",
    "FACTUAL_KEYWORDS",
    "GENERIC_WHY_THIS_TABLE",
    "ChatReply",
    "ChatSession",
    "ConversationStore",
    "MessagePhase",
    "QueryClassifier",
    "QueryIntent",
    "ResolutionEngine",
    "ResponseCache",
    "SessionOrigin",
    "TemplateFallbackGenerator",
    "TurnOutcome",
    "classify",
]
