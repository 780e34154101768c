"""
Conversation Orchestrator

Runs one conversation turn from user input to response text.

Turn state machine, recorded on the session:
    Idle -> ReceivedMessage -> Classified -> {Escalate | RespondNormally} -> Idle

SAFETY: A HIGH risk turn always takes the crisis path. The normal
response selector is never consulted for it, and the turn is logged
as a crisis event before the response is returned.

Storage and the escalation handler are collaborators. Their failures
are reported and never abort a turn.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from counselcare.config.logging_config import bind_session_id, clear_context, get_logger
from counselcare.domain.clock import Clock, utc_now
from counselcare.domain.enums.classification import RiskLevel
from counselcare.domain.enums.conversation import (
    ChatSurface,
    ResponseCategory,
    Sender,
    TurnState,
)
from counselcare.domain.models.assessment import (
    LOW_RISK,
    NEUTRAL_SENTIMENT,
    RiskAssessment,
    SentimentResult,
)
from counselcare.domain.models.crisis_event import CrisisEvent
from counselcare.domain.models.message import ConversationHistory, Message
from counselcare.domain.models.session import ConversationSession
from counselcare.infrastructure.metrics import (
    track_escalation,
    track_response,
    track_risk_assessment,
    track_sentiment,
    track_turn,
)
from counselcare.infrastructure.monitoring import (
    capture_exception_with_context,
    capture_safety_event,
    set_session_context,
)
from counselcare.infrastructure.storage import ConversationHistoryRepository
from counselcare.services.detection.sentiment_classifier import SentimentClassifier
from counselcare.services.responses.response_selector import ResponseSelector
from counselcare.services.safety.crisis_logger import CrisisEventLogger
from counselcare.services.safety.crisis_resources import CrisisResourceDirectory
from counselcare.services.safety.risk_assessor import RiskAssessor

logger = get_logger(__name__)


@dataclass(frozen=True)
class EscalationSignal:
    """
    Notification sent to the presentation layer on a crisis turn.

    Attributes:
        session_id: Conversation that escalated
        surface: Chat surface of the conversation
        risk: Risk assessment that triggered escalation
        resources_text: Crisis resources to display
        crisis_event: Logged crisis event
    """

    session_id: str
    surface: ChatSurface
    risk: RiskAssessment
    resources_text: str
    crisis_event: CrisisEvent


EscalationHandler = Callable[[EscalationSignal], None]


@dataclass(frozen=True)
class TurnResult:
    """
    Outcome of one conversation turn.

    Attributes:
        accepted: False for invalid (empty or non-string) input
        response_text: System response (None when not accepted)
        sentiment: Classification of the user message
        risk: Risk assessment of the user message
        category: Template category used for the response
        escalated: Whether the crisis flow ran
        crisis_event: Logged event when escalated
        resources_text: Crisis resources when escalated
    """

    accepted: bool
    response_text: Optional[str]
    sentiment: SentimentResult
    risk: RiskAssessment
    category: Optional[ResponseCategory] = None
    escalated: bool = False
    crisis_event: Optional[CrisisEvent] = None
    resources_text: Optional[str] = None

    def to_dict(self) -> dict:
        """Serialize for the presentation layer."""
        return {
            "accepted": self.accepted,
            "response": self.response_text,
            "sentiment": self.sentiment.label.value,
            "risk_level": self.risk.level.value,
            "category": self.category.value if self.category else None,
            "escalated": self.escalated,
            "crisis_event_id": str(self.crisis_event.event_id) if self.crisis_event else None,
            "resources": self.resources_text,
        }


REJECTED_TURN = TurnResult(
    accepted=False,
    response_text=None,
    sentiment=NEUTRAL_SENTIMENT,
    risk=LOW_RISK,
)


class ConversationOrchestrator:
    """
    Coordinates classification, risk assessment, response selection
    and crisis logging for one chat surface.

    The surface is taken from the selector's response profile.

    Usage:
        orchestrator = ConversationOrchestrator(
            classifier=SentimentClassifier(),
            risk_assessor=RiskAssessor(),
            selector=ResponseSelector(COMPANION_PROFILE),
            crisis_logger=CrisisEventLogger(store),
        )
        session = orchestrator.start_session("session-1")
        result = orchestrator.process_message(session, "I'm feeling anxious")
    """

    DEFAULT_CRISIS_CONTEXT_SIZE: int = 5

    def __init__(
        self,
        classifier: Optional[SentimentClassifier] = None,
        risk_assessor: Optional[RiskAssessor] = None,
        selector: Optional[ResponseSelector] = None,
        crisis_logger: Optional[CrisisEventLogger] = None,
        history_repository: Optional[ConversationHistoryRepository] = None,
        resource_directory: Optional[CrisisResourceDirectory] = None,
        escalation_handler: Optional[EscalationHandler] = None,
        clock: Clock = utc_now,
        crisis_context_size: int = DEFAULT_CRISIS_CONTEXT_SIZE,
        history_max_size: int = ConversationHistory.DEFAULT_MAX_SIZE,
        default_country: str = "US",
    ) -> None:
        """
        Initialize orchestrator with services.

        Args:
            classifier: Sentiment classifier
            risk_assessor: Risk assessor (shares the classifier lexicon by default)
            selector: Response selector carrying the surface profile
            crisis_logger: Crisis event logger
            history_repository: Optional history persistence, scoped to this surface
            resource_directory: Crisis contacts by country
            escalation_handler: Optional presentation callback for crisis turns
            clock: Timestamp source for messages
            crisis_context_size: Messages attached to each crisis event
            history_max_size: History cap for new and restored sessions
            default_country: Country for sessions started without one
        """
        self._classifier = classifier or SentimentClassifier()
        self._risk_assessor = risk_assessor or RiskAssessor(self._classifier.lexicon)
        self._selector = selector or ResponseSelector()
        self._crisis_logger = crisis_logger or CrisisEventLogger(clock=clock)
        # History is namespaced per surface in a shared store
        self._history_repository = (
            history_repository.scoped(self.surface.value)
            if history_repository is not None
            else None
        )
        self._resources = resource_directory or CrisisResourceDirectory()
        self._escalation_handler = escalation_handler
        self._clock = clock
        self._crisis_context_size = crisis_context_size
        self._history_max_size = history_max_size
        self._default_country = default_country

    @property
    def surface(self) -> ChatSurface:
        return self._selector.profile.surface

    @property
    def crisis_logger(self) -> CrisisEventLogger:
        return self._crisis_logger

    # =========================================================================
    # SESSION LIFECYCLE
    # =========================================================================

    def start_session(self, session_id: str, country_code: Optional[str] = None) -> ConversationSession:
        """
        Create a session, restoring stored history when available.

        Args:
            session_id: Opaque caller-supplied identifier
            country_code: Country used for crisis resources (defaults to the
                orchestrator default country)

        Returns:
            New session for this orchestrator's surface
        """
        history = self.load_history(session_id)
        if history is None:
            history = ConversationHistory(max_size=self._history_max_size)
        return self._new_session(session_id, history, country_code)

    def load_session(self, session_id: str, country_code: Optional[str] = None) -> Optional[ConversationSession]:
        """
        Restore a session from storage.

        Returns:
            The restored session, or None if nothing is stored
        """
        history = self.load_history(session_id)
        if history is None:
            return None
        return self._new_session(session_id, history, country_code)

    def load_history(self, session_id: str) -> Optional[ConversationHistory]:
        if self._history_repository is None:
            return None
        return self._history_repository.load(session_id)

    def _new_session(
        self,
        session_id: str,
        history: ConversationHistory,
        country_code: Optional[str],
    ) -> ConversationSession:
        return ConversationSession(
            session_id=session_id,
            surface=self.surface,
            history=history,
            started_at=self._clock(),
            country_code=country_code or self._default_country,
            message_count=len(history.by_sender(Sender.USER)),
        )

    # =========================================================================
    # TURN PROCESSING
    # =========================================================================

    def process_message(self, session: ConversationSession, text: Any) -> TurnResult:
        """
        Process one user message.

        Invalid input (non-string, empty or whitespace-only) is a no-op:
        history is untouched and a rejected TurnResult is returned.

        Args:
            session: Conversation context, mutated in place
            text: Raw user input

        Returns:
            TurnResult describing the response
        """
        if not isinstance(text, str) or not text.strip():
            logger.debug("Ignoring empty message", session_id=session.session_id)
            return REJECTED_TURN

        bind_session_id(session.session_id, surface=self.surface.value)
        try:
            with track_turn(self.surface.value):
                result = self._run_turn(session, text)
        finally:
            session.turn_state = TurnState.IDLE
            clear_context()

        self._save_history(session)
        return result

    def _run_turn(self, session: ConversationSession, text: str) -> TurnResult:
        # Received: classify first so the stored message carries its sentiment
        session.turn_state = TurnState.RECEIVED_MESSAGE
        sentiment = self._classifier.classify(text)
        session.add_message(
            Message(text=text, sender=Sender.USER, timestamp=self._clock(), sentiment=sentiment)
        )

        # Classified
        risk = self._risk_assessor.assess(text, sentiment)
        session.turn_state = TurnState.CLASSIFIED
        session.current_sentiment = sentiment.label
        session.current_risk = risk.level
        track_sentiment(sentiment.label.value)
        track_risk_assessment(risk.level.value)

        logger.debug(
            "Message classified",
            surface=self.surface.value,
            sentiment=sentiment.label.value,
            risk_level=risk.level.value,
        )

        if risk.level == RiskLevel.HIGH:
            session.turn_state = TurnState.ESCALATE
            return self._escalate(session, sentiment, risk)

        session.turn_state = TurnState.RESPOND_NORMALLY
        selection = self._selector.select(text, sentiment, session.history)
        self._append_system_message(session, selection.text)
        track_response(self.surface.value, selection.category.value)

        return TurnResult(
            accepted=True,
            response_text=selection.text,
            sentiment=sentiment,
            risk=risk,
            category=selection.category,
        )

    def _escalate(
        self,
        session: ConversationSession,
        sentiment: SentimentResult,
        risk: RiskAssessment,
    ) -> TurnResult:
        """Run the crisis flow for a HIGH risk turn."""
        selection = self._selector.crisis_response()
        self._append_system_message(session, selection.text)
        session.escalation_count += 1
        track_escalation(self.surface.value)
        track_response(self.surface.value, selection.category.value)

        event = self._crisis_logger.log_crisis_event(
            session.session_id,
            session.recent_messages(self._crisis_context_size),
            source=self.surface,
        )

        resources_text = self._resources.format_crisis_message(session.country_code)

        set_session_context(
            session.session_id,
            surface=self.surface.value,
            risk_level=risk.level.value,
        )
        capture_safety_event(
            "Crisis escalation",
            extra={
                "session_id": session.session_id,
                "surface": self.surface.value,
                "event_id": str(event.event_id),
                "escalation_count": session.escalation_count,
            },
        )

        logger.warning(
            "Crisis escalation",
            surface=self.surface.value,
            matched_phrase=risk.matched_phrase,
            escalation_count=session.escalation_count,
        )

        self._notify_escalation(
            EscalationSignal(
                session_id=session.session_id,
                surface=self.surface,
                risk=risk,
                resources_text=resources_text,
                crisis_event=event,
            )
        )

        return TurnResult(
            accepted=True,
            response_text=selection.text,
            sentiment=sentiment,
            risk=risk,
            category=selection.category,
            escalated=True,
            crisis_event=event,
            resources_text=resources_text,
        )

    def _notify_escalation(self, signal: EscalationSignal) -> None:
        if self._escalation_handler is None:
            return
        try:
            self._escalation_handler(signal)
        except Exception as e:
            # The crisis response has already been chosen; the turn completes regardless
            logger.error(
                "Escalation handler failed",
                session_id=signal.session_id,
                error=str(e),
            )
            capture_exception_with_context(e, session_id=signal.session_id)

    def _append_system_message(self, session: ConversationSession, text: str) -> None:
        session.add_message(Message(text=text, sender=Sender.SYSTEM, timestamp=self._clock()))

    def _save_history(self, session: ConversationSession) -> None:
        if self._history_repository is None:
            return
        self._history_repository.save(session.session_id, session.history)
