"""TableTalk AI - response resolution and caching for the restaurant assistant.

This package decides where every AI-generated line in the app comes from:
a 24h cache, the conversational LLM, the restaurant-facts API, or a
deterministic template when both providers are unreachable.

Layers:
    - protocols: Interface contracts (KeyValueStore, ChatProvider, FactsProvider)
    - repositories: Redis store and HTTP provider clients
    - services: Cache, conversation store, classifier, templates, engine
    - dto: Wire and storage formats
    - entities: Domain models (internal)

Usage:
    ```python
    from tabletalk_ai import ResolutionEngine, configure_logging

    configure_logging()
    engine = ResolutionEngine.create()
    ```
"""

from tabletalk_ai.config import get_redis_client, get_settings, settings
from tabletalk_ai.entities import (
    ChatMessage,
    ConversationRecord,
    ConversationTurn,
    PlanAction,
    PlanDraft,
    QueryKind,
    RestaurantSnapshot,
    Role,
    TableStarter,
    UserPreferences,
)
from tabletalk_ai.errors import (
    CachePersistenceError,
    ProviderAuthError,
    ProviderError,
    ProviderErrorKind,
    ProviderMalformedResponse,
    ProviderNetworkError,
    ProviderRateLimited,
    ProviderServerError,
    SessionBusyError,
    TableTalkError,
)
from tabletalk_ai.logging_config import configure_logging
from tabletalk_ai.protocols import ChatProvider, FactsProvider, KeyValueStore
from tabletalk_ai.repositories import GroqChatClient, RedisKeyValueStore, YelpAIClient
from tabletalk_ai.services import (
    ChatReply,
    ChatSession,
    ConversationStore,
    QueryClassifier,
    QueryIntent,
    ResolutionEngine,
    ResponseCache,
    TemplateFallbackGenerator,
    TurnOutcome,
    classify,
)

__all__ = [
    # Configuration
    "settings",
    "get_settings",
    "get_redis_client",
    "configure_logging",
    # Protocols (interfaces)
    "KeyValueStore",
    "ChatProvider",
    "FactsProvider",
    # Services (business logic)
    "ResolutionEngine",
    "ResponseCache",
    "ConversationStore",
    "QueryClassifier",
    "QueryIntent",
    "classify",
    "TemplateFallbackGenerator",
    "ChatSession",
    "ChatReply",
    "TurnOutcome",
    # Repositories (data access)
    "RedisKeyValueStore",
    "GroqChatClient",
    "YelpAIClient",
    # Entities (domain models)
    "ChatMessage",
    "ConversationRecord",
    "ConversationTurn",
    "PlanAction",
    "PlanDraft",
    "QueryKind",
    "RestaurantSnapshot",
    "Role",
    "TableStarter",
    "UserPreferences",
    # Errors
    "TableTalkError",
    "ProviderError",
    "ProviderErrorKind",
    "ProviderAuthError",
    "ProviderRateLimited",
    "ProviderServerError",
    "ProviderNetworkError",
    "ProviderMalformedResponse",
    "CachePersistenceError",
    "SessionBusyError",
]
