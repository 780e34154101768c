"""
Risk Assessor

Combines classifier output with direct phrase matches to produce
a three-tier risk level.

SAFETY-CRITICAL: A HIGH result routes the turn to the crisis flow.
False negatives are worse than false positives; the rules below
only ever escalate, never suppress, a crisis label.
"""

from typing import Any, Optional

from counselcare.domain.enums.classification import RiskLevel, SentimentLabel
from counselcare.domain.models.assessment import LOW_RISK, RiskAssessment, SentimentResult
from counselcare.services.detection.lexicon import DEFAULT_LEXICON, Lexicon
from counselcare.services.detection.sentiment_classifier import normalize_text


def _first_match(text: str, phrases: tuple[str, ...]) -> Optional[str]:
    for phrase in phrases:
        if phrase in text:
            return phrase
    return None


class RiskAssessor:
    """
    Maps a message and its sentiment to LOW, MEDIUM or HIGH risk.

    Rules, first match wins:
    1. CRISIS sentiment -> HIGH (matched phrase: first crisis phrase)
    2. Any high-risk phrase -> HIGH
    3. Any medium-risk phrase -> MEDIUM
    4. NEGATIVE sentiment -> MEDIUM (no matched phrase)
    5. Otherwise LOW

    Deterministic and side-effect free.

    Usage:
        assessor = RiskAssessor()
        risk = assessor.assess(text, classifier.classify(text))
    """

    def __init__(self, lexicon: Optional[Lexicon] = None) -> None:
        self._lexicon = lexicon or DEFAULT_LEXICON

    def assess(self, text: Any, sentiment: SentimentResult) -> RiskAssessment:
        """
        Assess risk for a message.

        Args:
            text: Raw message (non-string input is tolerated)
            sentiment: Classifier output for the same message

        Returns:
            RiskAssessment with level and deciding phrase
        """
        normalized = normalize_text(text)

        if sentiment.label == SentimentLabel.CRISIS:
            return RiskAssessment(
                level=RiskLevel.HIGH,
                matched_phrase=_first_match(normalized, self._lexicon.crisis_phrases),
            )

        if not normalized.strip():
            return LOW_RISK

        high = _first_match(normalized, self._lexicon.high_risk_phrases)
        if high is not None:
            return RiskAssessment(level=RiskLevel.HIGH, matched_phrase=high)

        medium = _first_match(normalized, self._lexicon.medium_risk_phrases)
        if medium is not None:
            return RiskAssessment(level=RiskLevel.MEDIUM, matched_phrase=medium)

        # Negative sentiment is itself a medium-risk signal
        if sentiment.label == SentimentLabel.NEGATIVE:
            return RiskAssessment(level=RiskLevel.MEDIUM)

        return LOW_RISK
