"""
Tests for the deterministic fallback copy.
"""

from dataclasses import replace

import pytest

from tabletalk_ai.entities import PlanDraft, QueryKind, UserPreferences
from tabletalk_ai.services import GENERIC_WHY_THIS_TABLE, TemplateFallbackGenerator


@pytest.fixture
def templates():
    return TemplateFallbackGenerator()


def test_why_this_table_without_preferences(templates, restaurant):
    assert templates.why_this_table(restaurant, None) == GENERIC_WHY_THIS_TABLE


def test_why_this_table_combines_first_two_reasons(templates, restaurant, preferences):
    text = templates.why_this_table(restaurant, preferences)

    # cuisine + ambience; the budget match is dropped
    assert text == "Queued because you picked Thai + casual"


def test_cuisine_matches_in_either_direction(templates, restaurant):
    prefs = UserPreferences(cuisines=("thai food",), budget=())
    assert (
        templates.why_this_table(restaurant, prefs)
        == "Queued because you picked thai food + casual"
    )

    seafood = replace(restaurant, categories=("Seafood Restaurants",), ambience={})
    prefs = UserPreferences(cuisines=("seafood",), budget=())
    assert templates.why_this_table(seafood, prefs) == "Queued because you picked seafood"


def test_ambience_priority(templates, restaurant):
    lively = replace(restaurant, categories=(), ambience={"romantic": True, "lively": True})
    prefs = UserPreferences(cuisines=(), budget=())

    assert templates.why_this_table(lively, prefs) == "Queued because lively"


def test_budget_reason(templates, restaurant):
    plain = replace(restaurant, categories=("Burgers",), ambience={})
    prefs = UserPreferences(cuisines=("Thai",), budget=("$$",))

    assert templates.why_this_table(plain, prefs) == "Queued because $2"


def test_no_match_falls_back_to_generic(templates, restaurant):
    plain = replace(restaurant, categories=("Burgers",), ambience={}, price="$$$$")
    prefs = UserPreferences(cuisines=("Thai",), budget=("$",))

    assert templates.why_this_table(plain, prefs) == GENERIC_WHY_THIS_TABLE


def test_restaurant_without_category_never_matches_cuisine(templates, restaurant):
    bare = replace(restaurant, categories=(), ambience={}, price=None)
    prefs = UserPreferences(cuisines=("Thai",), budget=("$$",))

    assert templates.why_this_table(bare, prefs) == GENERIC_WHY_THIS_TABLE


def test_invite_templates(templates, restaurant):
    assert (
        templates.generate(QueryKind.TABLE_STARTER_INVITE, restaurant)
        == "Want to try Thai Palace? Let's make it happen!"
    )
    assert (
        templates.generate(QueryKind.PLAN_COPILOT_DRAFT_INVITE, restaurant)
        == "Let's grab Thai Palace - who's in?"
    )


def test_suggest_times(templates, restaurant):
    assert (
        templates.generate(QueryKind.PLAN_COPILOT_SUGGEST_TIMES, restaurant)
        == "How about this week or weekend?"
    )


def test_group_friendly_depends_on_vibe(templates, restaurant):
    kind = QueryKind.PLAN_COPILOT_MAKE_GROUP_FRIENDLY

    assert (
        templates.generate(kind, restaurant, plan=PlanDraft(vibe="quickBite"))
        == "Perfect for groups - quick and casual"
    )
    assert (
        templates.generate(kind, restaurant, plan=PlanDraft(vibe="dinner"))
        == "Great for groups - spacious and welcoming"
    )
    assert templates.generate(kind, restaurant) == "Great for groups - spacious and welcoming"


def test_generate_dispatches_why_this_table(templates, restaurant, preferences):
    assert templates.generate(
        QueryKind.WHY_THIS_TABLE, restaurant, preferences
    ) == templates.why_this_table(restaurant, preferences)
