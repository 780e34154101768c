"""Conversation enumerations."""

from enum import StrEnum


class Sender(StrEnum):
    """Author of a conversation message."""

    USER = "user"
    SYSTEM = "system"


class ChatSurface(StrEnum):
    """
    Chat surface a conversation or crisis event originates from.

    Each surface uses its own response profile but shares the
    lexicon, classifier and risk assessor.
    """

    COMPANION = "companion"
    """AI companion chat with topical and contextual responses."""

    CHATBOT = "chatbot"
    """Site-wide support chatbot answering service questions."""

    CONTACT_FORM = "contact_form"
    """Contact-form submissions triaged for urgent follow-up."""


class TurnState(StrEnum):
    """
    Per-turn orchestration state.

    Idle -> ReceivedMessage -> Classified -> {Escalate | RespondNormally} -> Idle
    """

    IDLE = "idle"
    RECEIVED_MESSAGE = "received_message"
    CLASSIFIED = "classified"
    ESCALATE = "escalate"
    RESPOND_NORMALLY = "respond_normally"


class ResponseCategory(StrEnum):
    """
    Response template categories.

    Companion categories come first, followed by the categories
    used only by the site chatbot.
    """

    GREETING = "greeting"
    ANXIETY = "anxiety"
    DEPRESSION = "depression"
    STRESS = "stress"
    POSITIVE = "positive"
    COPING = "coping"
    RESOURCES = "resources"
    CRISIS = "crisis"
    EMPATHETIC_NEGATIVE = "empathetic_negative"
    EMPATHETIC_POSITIVE = "empathetic_positive"
    ANXIETY_FOLLOW_UP = "anxiety_follow_up"
    DEFAULT_EMPATHETIC = "default_empathetic"

    # Site chatbot
    SERVICES = "services"
    SCHEDULING = "scheduling"
    PRIVACY = "privacy"
    AI_FEATURES = "ai_features"
    PRICING = "pricing"
    EMERGENCY = "emergency"
    SUPPORT_DEFAULT = "support_default"
