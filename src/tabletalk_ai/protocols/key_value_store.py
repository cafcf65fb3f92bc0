"""Key-value store protocol.

Defines the interface of the flat, durable key-value store that backs both
the response cache and the conversation store.

Implementations can include:
- Redis (default)
- A device storage bridge
- An in-memory dictionary (tests)

Writes are assumed crash-consistent at single-key granularity. Backend
failures are reported as CachePersistenceError.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Protocol for key-value storage backends.

    Any type that implements these coroutines satisfies the protocol, no
    explicit inheritance needed.

    Example:
        ```python
        from tabletalk_ai.protocols import KeyValueStore

        store: KeyValueStore = RedisKeyValueStore.create()
        ```
    """

    async def get(self, key: str) -> bytes | None:
        """Read the value stored under ``key``.

        Args:
            key: The storage key

        Returns:
            The stored bytes, or None if the key does not exist
        """
        ...

    async def set(self, key: str, value: bytes) -> None:
        """Store ``value`` under ``key``, replacing any previous value.

        Args:
            key: The storage key
            value: The bytes to store
        """
        ...

    async def delete(self, key: str) -> None:
        """Delete ``key``. Deleting a missing key is not an error.

        Args:
            key: The storage key
        """
        ...

    async def list_keys(self, prefix: str) -> list[str]:
        """List every key that starts with ``prefix``.

        Args:
            prefix: The key prefix to match

        Returns:
            Matching keys, in no particular order
        """
        ...
