"""Conversation orchestration package."""

from counselcare.services.orchestration.conversation_orchestrator import (
    ConversationOrchestrator,
    EscalationHandler,
    EscalationSignal,
    REJECTED_TURN,
    TurnResult,
)

__all__ = [
    "ConversationOrchestrator",
    "EscalationHandler",
    "EscalationSignal",
    "REJECTED_TURN",
    "TurnResult",
]
