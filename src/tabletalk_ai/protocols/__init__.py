"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Redis -> device storage, Groq -> another LLM)
- Unit testing with fake implementations
- Clear separation of concerns
"""

from .key_value_store import KeyValueStore
from .providers import ChatProvider, FactsProvider

__all__ = [
    "ChatProvider",
    "FactsProvider",
    "KeyValueStore",
]
