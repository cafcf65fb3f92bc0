"""
Tests for factual/conversational question classification.
"""

import pytest

from tabletalk_ai.services import QueryClassifier, QueryIntent, classify


def test_hours_question_is_factual():
    """Test a factual question."""
    assert classify("What are the hours?") is QueryIntent.FACTUAL


def test_date_question_is_conversational():
    """Test a conversational question."""
    assert classify("Is this place good for a date?") is QueryIntent.CONVERSATIONAL


@pytest.mark.parametrize(
    "question",
    [
        "Are you OPEN on Sundays?",
        "When do you close tonight?",
        "Can I see the menu",
        "Do I need a reservation",
        "What's the phone number?",
        "Any vegan options?",
        "Is it gluten-free friendly?",
    ],
)
def test_keywords_match_case_insensitively(question):
    assert classify(question) is QueryIntent.FACTUAL


def test_substring_match_inside_longer_words():
    assert classify("Is the kitchen closed?") is QueryIntent.FACTUAL


def test_empty_question_is_conversational():
    assert classify("") is QueryIntent.CONVERSATIONAL


def test_custom_keywords():
    classifier = QueryClassifier(keywords=("Parking",))

    assert classifier.classify("Is there parking nearby?") is QueryIntent.FACTUAL
    assert classifier.classify("What are the hours?") is QueryIntent.CONVERSATIONAL
    assert classifier.keywords == ("parking",)
