"""
Unit Tests for Risk Assessor

Tests the ordered risk rules and the deciding phrase reported
for each tier.
"""

import pytest

from counselcare.domain.enums.classification import RiskLevel, SentimentLabel
from counselcare.domain.models.assessment import SentimentResult


def assess(classifier, risk_assessor, text):
    return risk_assessor.assess(text, classifier.classify(text))


class TestHighRisk:
    """HIGH tier rules."""

    def test_crisis_sentiment_is_high(self, classifier, risk_assessor):
        risk = assess(classifier, risk_assessor, "I want to kill myself")

        assert risk.level == RiskLevel.HIGH
        assert risk.requires_escalation
        assert risk.matched_phrase == "kill myself"

    def test_crisis_word_only_has_no_matched_phrase(self, classifier, risk_assessor):
        """Only crisis phrases are reported; a lone crisis word leaves it empty."""
        risk = assess(classifier, risk_assessor, "I keep thinking of suicide")

        assert risk.level == RiskLevel.HIGH
        assert risk.matched_phrase is None

    def test_first_crisis_phrase_in_lexicon_order(self, classifier, risk_assessor):
        risk = assess(classifier, risk_assessor, "I want to die, I want to end it all")

        assert risk.matched_phrase == "end it all"

    def test_high_risk_phrase_without_crisis_sentiment(self, classifier, risk_assessor):
        text = "honestly no one would miss me"
        sentiment = classifier.classify(text)

        risk = risk_assessor.assess(text, sentiment)

        assert sentiment.label != SentimentLabel.CRISIS
        assert risk.level == RiskLevel.HIGH
        assert risk.matched_phrase == "no one would miss me"

    def test_crisis_label_is_never_downgraded(self, risk_assessor):
        """A CRISIS label alone is enough for HIGH."""
        risk = risk_assessor.assess(
            "nothing in the lexicon here",
            SentimentResult(label=SentimentLabel.CRISIS, crisis_hits=1),
        )

        assert risk.level == RiskLevel.HIGH


class TestMediumRisk:
    """MEDIUM tier rules."""

    def test_medium_phrase(self, classifier, risk_assessor):
        risk = assess(classifier, risk_assessor, "I've been having panic attacks")

        assert risk.level == RiskLevel.MEDIUM
        assert risk.matched_phrase == "panic attacks"

    def test_medium_phrase_with_neutral_sentiment(self, classifier, risk_assessor):
        text = "I feel like I am losing control"

        assert classifier.classify(text).label == SentimentLabel.NEUTRAL
        assert risk_assessor.assess(text, classifier.classify(text)).level == RiskLevel.MEDIUM

    def test_negative_sentiment_alone_is_medium(self, classifier, risk_assessor):
        risk = assess(classifier, risk_assessor, "I'm feeling anxious")

        assert risk.level == RiskLevel.MEDIUM
        assert risk.matched_phrase is None


class TestLowRisk:
    """LOW tier and tolerant input handling."""

    @pytest.mark.parametrize("text", [
        "I'm feeling great today, thanks!",
        "work has been really stressful lately",
        "hello",
    ])
    def test_low_risk_text(self, classifier, risk_assessor, text):
        assert assess(classifier, risk_assessor, text).level == RiskLevel.LOW

    @pytest.mark.parametrize("text", ["", "   ", None, 3.14])
    def test_invalid_input_is_low(self, classifier, risk_assessor, text):
        risk = assess(classifier, risk_assessor, text)

        assert risk.level == RiskLevel.LOW
        assert risk.matched_phrase is None


def test_risk_level_rank_orders_tiers():
    assert RiskLevel.LOW.rank < RiskLevel.MEDIUM.rank < RiskLevel.HIGH.rank
