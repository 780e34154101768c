"""Detection services package."""

from counselcare.services.detection.lexicon import (
    DEFAULT_LEXICON,
    Lexicon,
    LexiconMissingError,
    load_lexicon,
)
from counselcare.services.detection.sentiment_classifier import SentimentClassifier

__all__ = [
    "DEFAULT_LEXICON",
    "Lexicon",
    "LexiconMissingError",
    "load_lexicon",
    "SentimentClassifier",
]
