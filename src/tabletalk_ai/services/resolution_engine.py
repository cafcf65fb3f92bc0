"""Resolution engine: cache, providers, fallbacks and chat state.

This service decides, for every AI-backed feature, where the answer comes
from:

    cache -> primary provider -> (secondary provider) -> static template

Cacheable features (why-this-table, invite copy, plan copilot) never raise
to the caller. Chat turns are not cached; they are appended to a per
restaurant conversation that is persisted after every answer.
"""

import asyncio
import time
import uuid
from collections.abc import Awaitable, Callable, Sequence
from datetime import datetime, timezone

from loguru import logger

from tabletalk_ai.entities import (
    ChatMessage,
    ConversationTurn,
    PlanAction,
    PlanDraft,
    QueryKind,
    RestaurantSnapshot,
    Role,
    TableStarter,
    UserPreferences,
)
from tabletalk_ai.errors import ProviderError, SessionBusyError
from tabletalk_ai.protocols import ChatProvider, FactsProvider, KeyValueStore
from tabletalk_ai.repositories import GroqChatClient, RedisKeyValueStore, YelpAIClient

from .chat_session import ChatReply, ChatSession, MessagePhase, SessionOrigin, TurnOutcome
from .classifier import QueryClassifier, QueryIntent
from .conversation_store import ConversationStore
from .prompts import (
    ONE_LINE_ASSISTANT,
    build_facts_query,
    build_invite_prompt,
    build_plan_copilot_prompt,
    build_system_prompt,
    build_why_this_table_prompt,
)
from .response_cache import ResponseCache
from .templates import DEFAULT_PLAN_COPY, GENERIC_WHY_THIS_TABLE, TemplateFallbackGenerator

CHAT_ERROR_MESSAGE = "Sorry, I encountered an error. Please try again."
TABLE_STARTER_TIME_WINDOWS = ("Tonight", "This week", "Weekend")
TABLE_STARTER_VIBES = ("Quick bite", "Drinks", "Dinner")
WELCOME_MESSAGE_ID = "welcome"


def welcome_text(restaurant: RestaurantSnapshot) -> str:
    return (
        f"Hi! I'm here to help you plan your visit to {restaurant.name}. "
        "What would you like to know?"
    )


class ResolutionEngine:
    """Core orchestration of AI responses.

    Depends on PROTOCOLS, not concrete implementations:
    - KeyValueStore (through ResponseCache and ConversationStore)
    - ChatProvider: the conversational LLM (primary)
    - FactsProvider: the restaurant-facts API (secondary)

    The engine holds no per-restaurant state of its own beyond the registry
    of open chat sessions, so calls for different restaurants may run
    concurrently.

    Example:
        ```python
        engine = ResolutionEngine.create()

        why = await engine.why_this_table(restaurant, preferences)

        session = await engine.open_session(restaurant)
        reply = await engine.send_message(session, "What are the hours?")
        ```
    """

    def __init__(
        self,
        cache: ResponseCache,
        conversations: ConversationStore,
        chat_provider: ChatProvider,
        facts_provider: FactsProvider,
        templates: TemplateFallbackGenerator | None = None,
        classifier: QueryClassifier | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the resolution engine.

        Args:
            cache: Response cache for the soft features (required).
            conversations: Conversation persistence (required).
            chat_provider: Primary, conversational provider (required).
            facts_provider: Secondary, restaurant-facts provider (required).
            templates: Fallback generator. Defaults to TemplateFallbackGenerator().
            classifier: Question classifier. Defaults to QueryClassifier().
            clock: Source of the current Unix time for message timestamps.
        """
        self._cache = cache
        self._conversations = conversations
        self._chat = chat_provider
        self._facts = facts_provider
        self._templates = templates or TemplateFallbackGenerator()
        self._classifier = classifier or QueryClassifier()
        self._clock = clock
        self._sessions: dict[str, ChatSession] = {}

    @classmethod
    def create(
        cls,
        store: KeyValueStore | None = None,
        chat_provider: ChatProvider | None = None,
        facts_provider: FactsProvider | None = None,
    ) -> "ResolutionEngine":
        """Factory method to create ResolutionEngine with default collaborators.

        Args:
            store: Key-value store. If None, uses RedisKeyValueStore.
            chat_provider: Primary provider. If None, uses GroqChatClient.
            facts_provider: Secondary provider. If None, uses YelpAIClient.

        Returns:
            Configured ResolutionEngine
        """
        store = store or RedisKeyValueStore.create()
        return cls(
            cache=ResponseCache.create(store),
            conversations=ConversationStore.create(store),
            chat_provider=chat_provider or GroqChatClient.create(),
            facts_provider=facts_provider or YelpAIClient.create(),
        )

    # ------------------------------------------------------------------
    # Cacheable features
    # ------------------------------------------------------------------

    async def resolve(
        self,
        entity_id: str,
        kind: QueryKind,
        compute: Callable[[], Awaitable[str]],
        fallback: Callable[[], str],
    ) -> str:
        """Resolve one cacheable feature.

        1. Return the cached value if a live one exists (no network call).
        2. Otherwise call ``compute``; cache and return its result.
        3. If ``compute`` raises ProviderError, return ``fallback()``
           without caching it.

        Args:
            entity_id: The restaurant id
            kind: The feature (cache namespace)
            compute: Coroutine factory performing the provider call(s)
            fallback: Deterministic, network-free text for this feature

        Returns:
            The resolved text; never raises for provider failures
        """
        cached = await self._cache.get(entity_id, kind)
        if cached is not None:
            return cached

        try:
            value = await compute()
        except ProviderError as e:
            logger.warning(
                f"AI generation for {kind.value} ({entity_id}) failed, using fallback: {e}"
            )
            return fallback()

        logger.info(f"Resolved {kind.value} for {entity_id} from provider")
        await self._cache.put(entity_id, kind, value)
        return value

    async def why_this_table(
        self,
        restaurant: RestaurantSnapshot,
        preferences: UserPreferences | None,
    ) -> str:
        """One line explaining why a restaurant was queued for the user."""
        if preferences is None:
            return GENERIC_WHY_THIS_TABLE

        return await self.resolve(
            restaurant.id,
            QueryKind.WHY_THIS_TABLE,
            lambda: self._one_liner(build_why_this_table_prompt(restaurant, preferences)),
            lambda: self._templates.why_this_table(restaurant, preferences),
        )

    async def invite_copy(self, restaurant: RestaurantSnapshot) -> str:
        """One-line invite used when starting a table."""
        return await self.resolve(
            restaurant.id,
            QueryKind.TABLE_STARTER_INVITE,
            lambda: self._one_liner(build_invite_prompt(restaurant)),
            lambda: self._templates.table_starter_invite(restaurant),
        )

    async def table_starter(self, restaurant: RestaurantSnapshot) -> TableStarter:
        """Choices and invite copy shown when a user starts a table."""
        return TableStarter(
            time_windows=TABLE_STARTER_TIME_WINDOWS,
            vibes=TABLE_STARTER_VIBES,
            invite_copy=await self.invite_copy(restaurant),
        )

    async def plan_copilot(
        self,
        action: PlanAction | str,
        restaurant: RestaurantSnapshot,
        plan: PlanDraft | None = None,
    ) -> str:
        """Run one plan-copilot action for a restaurant.

        An unknown action gets the default plan copy and is never cached.
        """
        try:
            action = PlanAction(action)
        except ValueError:
            logger.warning(f"Unknown plan copilot action {action!r} for {restaurant.id}")
            return DEFAULT_PLAN_COPY
        kind = QueryKind.for_plan_action(action)
        return await self.resolve(
            restaurant.id,
            kind,
            lambda: self._one_liner(build_plan_copilot_prompt(action, restaurant, plan)),
            lambda: self._templates.generate(kind, restaurant, plan=plan),
        )

    async def _one_liner(self, prompt: str) -> str:
        return await self._chat.chat(ONE_LINE_ASSISTANT, [], prompt, temperature=0.7, max_tokens=64)

    async def clear_cache(self, entity_id: str | None = None) -> int:
        """Clear cached responses of one restaurant, or all of them."""
        if entity_id is None:
            return await self._cache.clear_all()
        return await self._cache.clear_entity(entity_id)

    # ------------------------------------------------------------------
    # Conversational chat
    # ------------------------------------------------------------------

    async def open_session(self, restaurant: RestaurantSnapshot) -> ChatSession:
        """Open the chat screen of a restaurant.

        Hydrates the persisted conversation, or seeds a welcome message when
        there is none. No provider is called. A session previously opened
        for the same restaurant is cancelled.
        """
        record = await self._conversations.load(restaurant.id)

        if record is not None and record.messages:
            session = ChatSession(
                restaurant,
                history=list(record.history),
                messages=list(record.messages),
                origin=SessionOrigin.HYDRATED,
            )
        else:
            welcome = ChatMessage(
                id=WELCOME_MESSAGE_ID,
                role=Role.ASSISTANT,
                text=welcome_text(restaurant),
                timestamp=self._now(),
            )
            session = ChatSession(
                restaurant,
                history=list(record.history) if record is not None else [],
                messages=[welcome],
                origin=SessionOrigin.SEEDED,
            )

        previous = self._sessions.get(restaurant.id)
        if previous is not None:
            previous.cancel()
        self._sessions[restaurant.id] = session
        logger.debug(f"Opened {session!r}")
        return session

    def close_session(self, session: ChatSession) -> None:
        """Close a chat screen; any reply still in flight will be discarded."""
        session.cancel()
        if self._sessions.get(session.entity_id) is session:
            del self._sessions[session.entity_id]

    async def send_message(self, session: ChatSession, question: str) -> ChatReply:
        """Send one user question and apply the answer to the session.

        The user turn is appended before any provider is called. The
        assistant turn is appended, and the whole record persisted, only if
        the session is still open when the answer arrives.

        Raises:
            ValueError: If the question is blank
            SessionBusyError: If a message is already being sent
        """
        question = question.strip()
        if not question:
            raise ValueError("question must not be empty")
        if session.phase is MessagePhase.SENDING:
            raise SessionBusyError(f"A message is already being sent to {session.entity_id}")
        if session.cancelled:
            return ChatReply(TurnOutcome.DISCARDED)

        prior_history = tuple(session.history)
        session.phase = MessagePhase.SENDING
        session.history.append(ConversationTurn(role=Role.USER, content=question))
        session.messages.append(self._message(Role.USER, question))

        try:
            text, source = await self._answer(session.restaurant, prior_history, question)
        except ProviderError as e:
            if session.cancelled:
                return self._discard(session)
            logger.error(f"Chat with {session.entity_id} failed on every provider: {e}")
            session.history.pop()
            error_message = self._message(Role.ASSISTANT, CHAT_ERROR_MESSAGE)
            session.messages.append(error_message)
            return ChatReply(TurnOutcome.FAILED, error_message)
        except asyncio.CancelledError:
            # Keep history and messages in lockstep for the next send
            session.history.pop()
            session.messages.pop()
            raise
        finally:
            session.phase = MessagePhase.IDLE

        if session.cancelled:
            return self._discard(session)

        assistant_message = self._message(Role.ASSISTANT, text)
        session.history.append(ConversationTurn(role=Role.ASSISTANT, content=text))
        session.messages.append(assistant_message)
        await self._conversations.save(session.to_record())
        return ChatReply(TurnOutcome.ANSWERED, assistant_message, source)

    async def _answer(
        self,
        restaurant: RestaurantSnapshot,
        history: Sequence[ConversationTurn],
        question: str,
    ) -> tuple[str, str]:
        """Produce the final text of a chat turn and the provider it came from.

        The primary provider is always asked first. If it fails, the facts
        provider is the last resort. If it succeeds on a factual question,
        the facts provider's answer supersedes it when available.

        Raises:
            ProviderError: If neither provider produced an answer
        """
        intent = self._classifier.classify(question)
        facts_query = build_facts_query(restaurant.name, question)

        try:
            primary = await self._chat.chat(
                build_system_prompt(restaurant),
                history,
                question,
                temperature=0.7,
                max_tokens=256,
            )
        except ProviderError as e:
            logger.warning(
                f"{self._chat.name} failed for {restaurant.id}, asking {self._facts.name}: {e}"
            )
            answer = await self._facts.ask(facts_query)
            return answer.text, self._facts.name

        if intent is QueryIntent.FACTUAL:
            try:
                answer = await self._facts.ask(
                    facts_query,
                    latitude=restaurant.latitude,
                    longitude=restaurant.longitude,
                )
            except ProviderError as e:
                logger.warning(
                    f"{self._facts.name} failed for {restaurant.id}, "
                    f"keeping {self._chat.name} answer: {e}"
                )
            else:
                return answer.text, self._facts.name

        return primary, self._chat.name

    def _discard(self, session: ChatSession) -> ChatReply:
        logger.warning(f"Discarding reply for closed session {session!r}")
        return ChatReply(TurnOutcome.DISCARDED)

    def _message(self, role: Role, text: str) -> ChatMessage:
        return ChatMessage(id=uuid.uuid4().hex, role=role, text=text, timestamp=self._now())

    def _now(self) -> datetime:
        return datetime.fromtimestamp(self._clock(), tz=timezone.utc)

    async def clear_conversation(self, entity_id: str) -> bool:
        """Forget the persisted conversation of a restaurant."""
        session = self._sessions.pop(entity_id, None)
        if session is not None:
            session.cancel()
        return await self._conversations.clear(entity_id)

    def active_session(self, entity_id: str) -> ChatSession | None:
        """The open session of a restaurant, if any."""
        return self._sessions.get(entity_id)
