"""Shared fixtures: in-memory store, scripted providers, controllable clock."""

import asyncio

import pytest

from tabletalk_ai.entities import FactsAnswer, RestaurantSnapshot, UserPreferences
from tabletalk_ai.errors import CachePersistenceError, ProviderServerError
from tabletalk_ai.services import ConversationStore, ResolutionEngine, ResponseCache


class InMemoryStore:
    """Dictionary-backed KeyValueStore."""

    def __init__(self) -> None:
        self.data: dict[str, bytes] = {}

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value):
        self.data[key] = value

    async def delete(self, key):
        self.data.pop(key, None)

    async def list_keys(self, prefix):
        return [k for k in self.data if k.startswith(prefix)]


class FailingWriteStore(InMemoryStore):
    """Reads work, every write or delete fails."""

    async def set(self, key, value):
        raise CachePersistenceError(f"disk full writing {key}")

    async def delete(self, key):
        raise CachePersistenceError(f"disk full deleting {key}")


class Clock:
    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeChatProvider:
    """Primary provider answering from a script.

    Each scripted item is either a string (returned) or an exception
    (raised). The last item repeats once the script is exhausted.
    """

    name = "fake-chat"

    def __init__(self, *script) -> None:
        self.script = list(script) or ["ok"]
        self.calls: list[dict] = []
        self.gate: asyncio.Event | None = None

    async def chat(self, system_prompt, history, question, *, temperature=0.7, max_tokens=512):
        self.calls.append(
            {"system_prompt": system_prompt, "history": list(history), "question": question}
        )
        if self.gate is not None:
            await self.gate.wait()
        item = self.script.pop(0) if len(self.script) > 1 else self.script[0]
        if isinstance(item, Exception):
            raise item
        return item


class FakeFactsProvider:
    name = "fake-facts"

    def __init__(self, *script) -> None:
        self.script = list(script) or ["facts"]
        self.calls: list[dict] = []

    async def ask(self, query, *, locale=None, latitude=None, longitude=None, chat_id=None):
        self.calls.append({"query": query, "latitude": latitude, "longitude": longitude})
        item = self.script.pop(0) if len(self.script) > 1 else self.script[0]
        if isinstance(item, Exception):
            raise item
        return FactsAnswer(text=item)


def server_error(provider: str = "fake") -> ProviderServerError:
    return ProviderServerError("boom", provider, 503)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def restaurant():
    return RestaurantSnapshot(
        id="thai-palace-sf",
        name="Thai Palace",
        categories=("Thai", "Noodles"),
        price="$$",
        rating=4.5,
        formatted_address="123 Mission St, San Francisco, CA",
        city="San Francisco",
        latitude=37.78,
        longitude=-122.41,
        ambience={"casual": True},
    )


@pytest.fixture
def preferences():
    return UserPreferences(cuisines=("Thai", "Italian"), budget=("$", "$$"), dietary=("vegan",))


@pytest.fixture
def chat_provider():
    return FakeChatProvider("Great pad thai and friendly staff.")


@pytest.fixture
def facts_provider():
    return FakeFactsProvider("Open 11am-10pm daily.")


@pytest.fixture
def engine(store, clock, chat_provider, facts_provider):
    return ResolutionEngine(
        cache=ResponseCache(store, ttl=24 * 60 * 60, prefix="@test:ai_cache:", clock=clock),
        conversations=ConversationStore(store, prefix="@test:restaurant_chat:", clock=clock),
        chat_provider=chat_provider,
        facts_provider=facts_provider,
        clock=clock,
    )
