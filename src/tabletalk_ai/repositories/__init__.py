"""Repository layer for data access.

This layer wraps the external collaborators (the key-value store and the
two provider APIs) behind protocol-based interfaces. This enables:
- Easy swapping of implementations
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
"""

from tabletalk_ai.protocols import ChatProvider, FactsProvider, KeyValueStore

from .groq_client import GroqChatClient
from .redis_store import RedisKeyValueStore
from .yelp_client import YelpAIClient

__all__ = [
    "ChatProvider",
    "FactsProvider",
    "KeyValueStore",
    "GroqChatClient",
    "RedisKeyValueStore",
    "YelpAIClient",
]
