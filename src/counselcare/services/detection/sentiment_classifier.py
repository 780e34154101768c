"""
Sentiment Classifier

Bag-of-keywords sentiment classification with crisis dominance.

CLINICAL_REVIEW_REQUIRED: Keyword presence is a coarse signal.
Results drive response tone and escalation, not diagnosis.
"""

from typing import Any, Optional

from counselcare.domain.enums.classification import SentimentLabel
from counselcare.domain.models.assessment import NEUTRAL_SENTIMENT, SentimentResult
from counselcare.services.detection.lexicon import DEFAULT_LEXICON, Lexicon


def normalize_text(text: Any) -> str:
    """
    Lowercase text for matching.

    Non-string input normalizes to the empty string.
    """
    if not isinstance(text, str):
        return ""
    return text.lower()


def find_terms(text: str, terms: tuple[str, ...]) -> list[str]:
    """
    Find lexicon terms present in text.

    Args:
        text: Lowercased text to search
        terms: Ordered terms to look for

    Returns:
        Terms contained in the text, in lexicon order
    """
    return [term for term in terms if term in text]


class SentimentClassifier:
    """
    Classifies free text as positive, negative, neutral or crisis.

    Rules, in order:
    1. Empty or non-string input is NEUTRAL with zero hits
    2. Any crisis word or phrase makes the message CRISIS
    3. Otherwise the side with strictly more distinct keyword hits
       wins; equal counts (including zero) are NEUTRAL

    Pure function of text and lexicon; no side effects.

    Usage:
        classifier = SentimentClassifier()
        result = classifier.classify("I'm feeling great today")
    """

    def __init__(self, lexicon: Optional[Lexicon] = None) -> None:
        self._lexicon = lexicon or DEFAULT_LEXICON

    @property
    def lexicon(self) -> Lexicon:
        return self._lexicon

    def classify(self, text: Any) -> SentimentResult:
        """
        Classify a message.

        Args:
            text: User input (non-string input is tolerated)

        Returns:
            SentimentResult with label and hit counts
        """
        normalized = normalize_text(text)
        if not normalized.strip():
            return NEUTRAL_SENTIMENT

        # Crisis detection short-circuits every other signal
        crisis_hits = len(find_terms(normalized, self._lexicon.crisis_terms))
        if crisis_hits > 0:
            return SentimentResult(
                label=SentimentLabel.CRISIS,
                crisis_hits=crisis_hits,
            )

        positive_hits = len(find_terms(normalized, self._lexicon.positive))
        negative_hits = len(find_terms(normalized, self._lexicon.negative))

        if negative_hits > positive_hits:
            label = SentimentLabel.NEGATIVE
        elif positive_hits > negative_hits:
            label = SentimentLabel.POSITIVE
        else:
            label = SentimentLabel.NEUTRAL

        return SentimentResult(
            label=label,
            positive_hits=positive_hits,
            negative_hits=negative_hits,
        )
