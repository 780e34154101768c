"""
Assessment Models

Derived classification outputs. Neither is persisted on its own:
a SentimentResult is embedded in the user Message it describes,
a RiskAssessment lives only for the duration of a turn.
"""

from dataclasses import dataclass
from typing import Optional

from counselcare.domain.enums.classification import RiskLevel, SentimentLabel


@dataclass(frozen=True)
class SentimentResult:
    """
    Keyword sentiment of one message.

    Attributes:
        label: Final classification
        positive_hits: Distinct positive keywords present
        negative_hits: Distinct negative keywords present
        crisis_hits: Distinct crisis words and phrases present
    """

    label: SentimentLabel = SentimentLabel.NEUTRAL
    positive_hits: int = 0
    negative_hits: int = 0
    crisis_hits: int = 0

    @property
    def is_crisis(self) -> bool:
        return self.label == SentimentLabel.CRISIS

    def to_dict(self) -> dict:
        return {
            "label": self.label.value,
            "positive_hits": self.positive_hits,
            "negative_hits": self.negative_hits,
            "crisis_hits": self.crisis_hits,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SentimentResult":
        return cls(
            label=SentimentLabel(data.get("label", SentimentLabel.NEUTRAL)),
            positive_hits=int(data.get("positive_hits", 0)),
            negative_hits=int(data.get("negative_hits", 0)),
            crisis_hits=int(data.get("crisis_hits", 0)),
        )


NEUTRAL_SENTIMENT = SentimentResult()


@dataclass(frozen=True)
class RiskAssessment:
    """
    Risk tier of one message.

    Attributes:
        level: Escalation tier
        matched_phrase: Lexicon phrase that decided the tier, if any
    """

    level: RiskLevel = RiskLevel.LOW
    matched_phrase: Optional[str] = None

    @property
    def requires_escalation(self) -> bool:
        return self.level == RiskLevel.HIGH

    def to_dict(self) -> dict:
        return {
            "level": self.level.value,
            "matched_phrase": self.matched_phrase,
        }


LOW_RISK = RiskAssessment()
