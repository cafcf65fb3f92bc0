#!/usr/bin/env python3
"""
Demo script for the TableTalk AI resolution layer.

This script walks through the cached AI features and a short restaurant
chat against a local Redis. Without GROQ_API_KEY / YELP_API_KEY every
feature falls back to its template text, which is also worth seeing.
"""

import asyncio
import time

from tabletalk_ai import configure_logging
from tabletalk_ai.entities import PlanAction, PlanDraft, RestaurantSnapshot, UserPreferences
from tabletalk_ai.services import ResolutionEngine

RESTAURANT = RestaurantSnapshot(
    id="demo-thai-palace",
    name="Thai Palace",
    categories=("Thai", "Noodles"),
    price="$$",
    rating=4.5,
    formatted_address="123 Mission St, San Francisco, CA",
    city="San Francisco",
    latitude=37.7897,
    longitude=-122.3942,
    ambience={"lively": True},
)

PREFERENCES = UserPreferences(cuisines=("Thai", "Japanese"), budget=("$", "$$"))


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


async def demo_cached_features(engine: ResolutionEngine) -> None:
    """Resolve each feature twice: the second call is served from the cache."""
    print_section("Cached AI Features")

    await engine.clear_cache(RESTAURANT.id)

    for attempt in ("cold", "warm"):
        start = time.time()
        why = await engine.why_this_table(RESTAURANT, PREFERENCES)
        duration = (time.time() - start) * 1000
        print(f"\n  Why this table ({attempt}, {duration:.1f}ms): {why}")

    print(f"\n  Without preferences: {await engine.why_this_table(RESTAURANT, None)}")

    starter = await engine.table_starter(RESTAURANT)
    print("\n🍽  Table starter:")
    print(f"  Times: {', '.join(starter.time_windows)}")
    print(f"  Vibes: {', '.join(starter.vibes)}")
    print(f"  Invite: {starter.invite_copy}")

    plan = PlanDraft(time_window="weekend", vibe="quickBite")
    print("\n🗓  Plan copilot:")
    for action in PlanAction:
        print(f"  {action.value}: {await engine.plan_copilot(action, RESTAURANT, plan)}")


async def demo_chat(engine: ResolutionEngine) -> None:
    """Send a conversational and a factual question, then reopen the chat."""
    print_section("Restaurant Chat")

    await engine.clear_conversation(RESTAURANT.id)
    session = await engine.open_session(RESTAURANT)
    print(f"\n  {session.messages[0].text}")

    for question in ("Is this place good for a date?", "What are the hours on Sunday?"):
        reply = await engine.send_message(session, question)
        print(f"\n  You: {question}")
        if reply.message is not None:
            source = f" [{reply.source}]" if reply.source else ""
            print(f"  AI{source} ({reply.outcome.value}): {reply.message.text}")

    engine.close_session(session)

    reopened = await engine.open_session(RESTAURANT)
    print(f"\n🔁 Reopened chat: {reopened.origin.value}, {len(reopened.messages)} messages")
    engine.close_session(reopened)


async def run() -> None:
    engine = ResolutionEngine.create()
    await demo_cached_features(engine)
    await demo_chat(engine)


def main() -> None:
    """Run all demos."""
    configure_logging()

    print("\n🚀 TableTalk AI Demo")
    print("=" * 70)
    print("Cache -> Groq -> Yelp AI -> template fallback")

    try:
        asyncio.run(run())

        print("\n" + "=" * 70)
        print("✅ Demo completed successfully!")
        print("=" * 70)

    except Exception as e:
        print(f"\n❌ Error: {e}")
        print("\nMake sure Redis is running:")
        print("  redis-server")
        print("\nOr set REDIS_URL to your Redis instance.")


if __name__ == "__main__":
    main()
