"""Lexical classification of restaurant questions."""

from enum import Enum

from loguru import logger

FACTUAL_KEYWORDS: tuple[str, ...] = (
    "hours",
    "open",
    "close",
    "menu",
    "reservation",
    "phone",
    "address",
    "dietary",
    "vegetarian",
    "vegan",
    "gluten",
)


class QueryIntent(str, Enum):
    FACTUAL = "factual"
    CONVERSATIONAL = "conversational"


class QueryClassifier:
    """Classifies a question as factual or conversational.

    A question is factual when it contains any keyword as a case-insensitive
    substring ("closed" and "opening" match too). Pure and stateless.
    """

    def __init__(self, keywords: tuple[str, ...] = FACTUAL_KEYWORDS) -> None:
        self._keywords = tuple(k.lower() for k in keywords)

    def classify(self, question: str) -> QueryIntent:
        text = question.lower()
        intent = (
            QueryIntent.FACTUAL
            if any(keyword in text for keyword in self._keywords)
            else QueryIntent.CONVERSATIONAL
        )
        logger.debug(f"classified question as {intent.value}")
        return intent

    @property
    def keywords(self) -> tuple[str, ...]:
        return self._keywords


_default_classifier = QueryClassifier()


def classify(question: str) -> QueryIntent:
    """Classify ``question`` with the default keyword set."""
    return _default_classifier.classify(question)
