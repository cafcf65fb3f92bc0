"""Durable per-restaurant conversation records."""

import time
from collections.abc import Callable

from loguru import logger
from pydantic import ValidationError

from tabletalk_ai.config import settings
from tabletalk_ai.dto import ConversationRecordDTO
from tabletalk_ai.entities import ConversationRecord
from tabletalk_ai.errors import CachePersistenceError
from tabletalk_ai.protocols import KeyValueStore


class ConversationStore:
    """Loads and saves one ConversationRecord per restaurant.

    Records are never deleted automatically; they survive restarts until
    ``clear`` or ``clear_all`` is called. Like the response cache, storage
    failures are logged and never raised.
    """

    def __init__(
        self,
        store: KeyValueStore,
        prefix: str | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the conversation store.

        Args:
            store: Key-value storage backend (required).
            prefix: Key namespace. Defaults to settings.chat_prefix.
            clock: Source of the current Unix time.
        """
        self._store = store
        self._prefix = prefix or settings.chat_prefix
        self._clock = clock

    @classmethod
    def create(cls, store: KeyValueStore) -> "ConversationStore":
        """Factory method to create ConversationStore with defaults."""
        return cls(store=store)

    def key_for(self, entity_id: str) -> str:
        return f"{self._prefix}{entity_id}"

    async def load(self, entity_id: str) -> ConversationRecord | None:
        """Load the record of ``entity_id``.

        Returns:
            The record, or None if none exists or it cannot be read
        """
        key = self.key_for(entity_id)
        try:
            raw = await self._store.get(key)
            if raw is None:
                return None
            return ConversationRecordDTO.model_validate_json(raw).to_entity(entity_id)
        except (CachePersistenceError, ValidationError) as e:
            logger.warning(f"Error loading conversation history {key}: {e}")
            return None

    async def save(self, record: ConversationRecord) -> ConversationRecord:
        """Persist ``record`` with a fresh ``updated_at``.

        Returns:
            The record as written (with its new timestamp). A storage failure
            is logged and the stamped record is still returned.
        """
        stamped = ConversationRecord(
            entity_id=record.entity_id,
            history=tuple(record.history),
            messages=tuple(record.messages),
            updated_at=self._clock(),
        )
        key = self.key_for(record.entity_id)
        payload = ConversationRecordDTO.from_entity(stamped).model_dump_json()
        try:
            await self._store.set(key, payload.encode("utf-8"))
        except CachePersistenceError as e:
            logger.warning(f"Error saving conversation history {key}: {e}")
            return stamped

        logger.info(
            f"Saved conversation for {record.entity_id} "
            f"({len(stamped.history)} turns, {len(stamped.messages)} messages)"
        )
        return stamped

    async def clear(self, entity_id: str) -> bool:
        """Delete the record of ``entity_id``.

        Returns:
            True if the delete was issued, False on storage failure
        """
        key = self.key_for(entity_id)
        try:
            await self._store.delete(key)
        except CachePersistenceError as e:
            logger.warning(f"Error clearing conversation {key}: {e}")
            return False
        return True

    async def clear_all(self) -> int:
        """Delete every conversation record.

        Returns:
            Number of records deleted
        """
        count = 0
        try:
            for key in await self._store.list_keys(self._prefix):
                await self._store.delete(key)
                count += 1
        except CachePersistenceError as e:
            logger.warning(f"Error clearing conversations: {e}")
        return count
