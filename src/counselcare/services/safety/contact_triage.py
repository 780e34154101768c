"""
Contact Triage

Routes contact-form submissions by risk so that messages showing
acute distress reach a crisis counselor first.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Optional

from counselcare.config.logging_config import get_logger
from counselcare.domain.enums.classification import RiskLevel
from counselcare.domain.enums.conversation import ChatSurface, Sender
from counselcare.domain.models.assessment import RiskAssessment, SentimentResult
from counselcare.domain.models.message import Message
from counselcare.infrastructure.metrics import (
    track_escalation,
    track_risk_assessment,
    track_sentiment,
)
from counselcare.services.detection.sentiment_classifier import SentimentClassifier
from counselcare.services.safety.crisis_logger import CrisisEventLogger
from counselcare.services.safety.risk_assessor import RiskAssessor

logger = get_logger(__name__)


class TriagePriority(StrEnum):
    ROUTINE = "routine"
    URGENT = "urgent"


URGENT_NOTICE = (
    "We've detected you may need immediate support. "
    "A crisis counselor will contact you within 30 minutes."
)

ROUTINE_NOTICE = "Thank you for contacting us! We'll get back to you within 24 hours."


@dataclass(frozen=True)
class TriageResult:
    """
    Routing decision for one submission.

    Attributes:
        sentiment: Classifier output
        risk: Risk assessment
        priority: Queue priority
        notice: Message to show the submitter
    """

    sentiment: SentimentResult
    risk: RiskAssessment
    priority: TriagePriority
    notice: str

    @property
    def is_urgent(self) -> bool:
        return self.priority == TriagePriority.URGENT

    def to_dict(self) -> dict:
        return {
            "sentiment": self.sentiment.label.value,
            "risk_level": self.risk.level.value,
            "priority": self.priority.value,
            "notice": self.notice,
        }


class ContactTriageService:
    """
    Classifies a contact-form message and assigns a priority.

    HIGH risk submissions are URGENT. When a crisis logger is
    supplied they are also recorded as crisis events.
    """

    def __init__(
        self,
        classifier: Optional[SentimentClassifier] = None,
        risk_assessor: Optional[RiskAssessor] = None,
        crisis_logger: Optional[CrisisEventLogger] = None,
    ) -> None:
        self._classifier = classifier or SentimentClassifier()
        self._risk_assessor = risk_assessor or RiskAssessor(self._classifier.lexicon)
        self._crisis_logger = crisis_logger

    def triage(self, message: Any, submission_id: str = "contact-form") -> TriageResult:
        """
        Triage one submission.

        Args:
            message: Free-text message body
            submission_id: Identifier used as session id for crisis events

        Returns:
            TriageResult with priority and user-facing notice
        """
        sentiment = self._classifier.classify(message)
        risk = self._risk_assessor.assess(message, sentiment)
        track_sentiment(sentiment.label.value)
        track_risk_assessment(risk.level.value)

        if risk.level != RiskLevel.HIGH:
            return TriageResult(
                sentiment=sentiment,
                risk=risk,
                priority=TriagePriority.ROUTINE,
                notice=ROUTINE_NOTICE,
            )

        track_escalation(ChatSurface.CONTACT_FORM.value)
        logger.warning(
            "Urgent contact submission",
            submission_id=submission_id,
            matched_phrase=risk.matched_phrase,
        )

        if self._crisis_logger is not None:
            self._crisis_logger.log_crisis_event(
                submission_id,
                [Message(text=message, sender=Sender.USER, sentiment=sentiment)],
                source=ChatSurface.CONTACT_FORM,
            )

        return TriageResult(
            sentiment=sentiment,
            risk=risk,
            priority=TriagePriority.URGENT,
            notice=URGENT_NOTICE,
        )
