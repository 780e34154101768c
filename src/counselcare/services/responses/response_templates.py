"""
Response Templates

Deterministic, reviewed response text for every chat surface.
A ResponseProfile bundles a surface's ordered topical rules with
its template catalog.

SAFETY CRITICAL: Template text is the only way the engine speaks to
a user. No free-form text generation is allowed.

Rule order is part of observable behavior: the first matching rule
wins, so moving a rule changes which template a message receives.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from counselcare.domain.enums.conversation import ChatSurface, ResponseCategory


@dataclass(frozen=True)
class TopicRule:
    """
    Keyword set mapped to a response category.

    A rule matches when ANY keyword is a substring of the
    lowercased text.
    """

    category: ResponseCategory
    keywords: tuple[str, ...]

    def matches(self, text_lower: str) -> bool:
        return any(keyword in text_lower for keyword in self.keywords)


@dataclass(frozen=True)
class ResponseProfile:
    """
    Response configuration of one chat surface.

    Attributes:
        surface: Chat surface the profile serves
        topical_rules: Rules checked in order against the message
        templates: Category -> ordered template tuple
        negative_category: Fallback for NEGATIVE sentiment
        positive_category: Fallback for POSITIVE sentiment
        follow_up_rules: Rules checked against recent history
        default_category: Category used when nothing else matches
        crisis_category: Category used by the crisis flow
    """

    surface: ChatSurface
    topical_rules: tuple[TopicRule, ...]
    templates: Mapping[ResponseCategory, tuple[str, ...]]
    negative_category: ResponseCategory
    positive_category: ResponseCategory
    default_category: ResponseCategory
    follow_up_rules: tuple[TopicRule, ...] = ()
    crisis_category: ResponseCategory = ResponseCategory.CRISIS

    def __post_init__(self) -> None:
        referenced = {
            self.negative_category,
            self.positive_category,
            self.default_category,
            self.crisis_category,
        }
        referenced.update(rule.category for rule in self.topical_rules)
        referenced.update(rule.category for rule in self.follow_up_rules)

        missing = sorted(c.value for c in referenced if not self.templates.get(c))
        if missing:
            raise ValueError(
                f"Profile '{self.surface}' has no templates for: {', '.join(missing)}"
            )

        object.__setattr__(self, "templates", MappingProxyType(dict(self.templates)))

    def templates_for(self, category: ResponseCategory) -> tuple[str, ...]:
        return self.templates[category]


# =============================================================================
# AI COMPANION
# =============================================================================

COMPANION_TEMPLATES: dict[ResponseCategory, tuple[str, ...]] = {
    ResponseCategory.GREETING: (
        "Hello! I'm here to support you. How are you feeling today?",
        "Hi there! I'm glad you're here. What's on your mind?",
        "Welcome! I'm here to listen and help. How can I support you today?",
    ),
    ResponseCategory.ANXIETY: (
        "I understand you're feeling anxious. Let's try some grounding techniques. "
        "Can you name 5 things you can see around you?",
        "Anxiety can be overwhelming. Would you like to try a breathing exercise together?",
        "I hear that you're anxious. Remember, this feeling is temporary. "
        "What usually helps you feel calmer?",
    ),
    ResponseCategory.DEPRESSION: (
        "I'm sorry you're going through a difficult time. "
        "Your feelings are valid, and you're not alone.",
        "Depression can make everything feel heavy. What's one small thing that "
        "brought you even a tiny bit of comfort recently?",
        "Thank you for sharing this with me. It takes courage to reach out. "
        "How can I best support you right now?",
    ),
    ResponseCategory.STRESS: (
        "Stress can be really challenging. Let's break this down - "
        "what's the main thing causing you stress right now?",
        "I can see you're dealing with a lot. "
        "Would it help to talk through some coping strategies?",
        "Stress affects us all differently. What does stress feel like in your body right now?",
    ),
    ResponseCategory.POSITIVE: (
        "I'm so glad to hear you're feeling good! What's contributing to these positive feelings?",
        "That's wonderful! It's important to acknowledge and celebrate these moments.",
        "I love hearing about your positive experiences. How can we build on this feeling?",
    ),
    ResponseCategory.COPING: (
        "Here are some coping strategies that might help: deep breathing, progressive "
        "muscle relaxation, or mindfulness meditation. Which appeals to you?",
        "Coping strategies are personal. What has worked for you in the past?",
        "Let's explore some healthy coping mechanisms together. Are you interested in "
        "breathing exercises, grounding techniques, or something else?",
    ),
    ResponseCategory.RESOURCES: (
        "I can recommend some helpful resources. Are you looking for articles, "
        "exercises, or professional support options?",
        "There are many great mental health resources available. "
        "What type of support are you most interested in?",
        "I'd be happy to share some resources with you. "
        "What specific area would you like help with?",
    ),
    ResponseCategory.CRISIS: (
        "I'm very concerned about what you've shared. Your safety is the most important "
        "thing right now. Please consider reaching out to a crisis helpline or emergency services.",
        "Thank you for trusting me with these difficult feelings. I want to make sure you get "
        "the immediate support you need. Can we connect you with professional help?",
        "I hear that you're in a lot of pain right now. You don't have to go through this alone. "
        "Let's get you connected with someone who can provide immediate support.",
    ),
    ResponseCategory.EMPATHETIC_NEGATIVE: (
        "I can sense you're going through a difficult time. I'm here to listen and support you. "
        "Would you like to talk about what's troubling you?",
    ),
    ResponseCategory.EMPATHETIC_POSITIVE: (
        "I'm glad to hear you're feeling positive! It's wonderful when we can find moments "
        "of joy and hope. What's contributing to these good feelings?",
    ),
    ResponseCategory.ANXIETY_FOLLOW_UP: (
        "How are you feeling about the anxiety we discussed earlier? Have you had a chance "
        "to try any of the techniques we talked about?",
    ),
    ResponseCategory.DEFAULT_EMPATHETIC: (
        "Thank you for sharing that with me. I'm here to listen and support you. "
        "How are you feeling right now?",
        "I appreciate you opening up. Your thoughts and feelings matter. "
        "What would be most helpful for you today?",
        "I hear you. It sounds like you have a lot on your mind. "
        "Would you like to explore any of these feelings together?",
        "That sounds important to you. I'm here to help you work through whatever "
        "you're experiencing. What feels most pressing right now?",
    ),
}

COMPANION_RULES: tuple[TopicRule, ...] = (
    TopicRule(ResponseCategory.ANXIETY, ("anxious", "anxiety", "worried")),
    TopicRule(ResponseCategory.DEPRESSION, ("depressed", "sad", "down")),
    TopicRule(ResponseCategory.STRESS, ("stressed", "stress", "overwhelmed")),
    TopicRule(ResponseCategory.POSITIVE, ("happy", "good", "great", "excited")),
    TopicRule(ResponseCategory.COPING, ("coping", "help", "strategies")),
    TopicRule(ResponseCategory.RESOURCES, ("resource", "article", "information")),
    TopicRule(ResponseCategory.GREETING, ("hello", "hi", "hey")),
)

COMPANION_PROFILE = ResponseProfile(
    surface=ChatSurface.COMPANION,
    topical_rules=COMPANION_RULES,
    templates=COMPANION_TEMPLATES,
    negative_category=ResponseCategory.EMPATHETIC_NEGATIVE,
    positive_category=ResponseCategory.EMPATHETIC_POSITIVE,
    follow_up_rules=(
        TopicRule(ResponseCategory.ANXIETY_FOLLOW_UP, ("anxiety", "anxious")),
    ),
    default_category=ResponseCategory.DEFAULT_EMPATHETIC,
)


# =============================================================================
# SITE CHATBOT
# =============================================================================

CHATBOT_TEMPLATES: dict[ResponseCategory, tuple[str, ...]] = {
    ResponseCategory.GREETING: (
        "Hello! I'm here to help you with any questions about our counseling services.",
        "Hi there! How can I assist you today?",
        "Welcome! What would you like to know about our online therapy platform?",
    ),
    ResponseCategory.SERVICES: (
        "We offer individual therapy, couples counseling, and group sessions with licensed therapists.",
        "Our services include anxiety treatment, depression counseling, stress management, "
        "and relationship therapy.",
        "All our sessions are conducted through secure video calls with HIPAA-compliant technology.",
    ),
    ResponseCategory.SCHEDULING: (
        "You can schedule sessions 7 days a week, including evenings and weekends.",
        "Most clients can get their first appointment within 24-48 hours.",
        "You can reschedule or cancel appointments up to 24 hours in advance.",
    ),
    ResponseCategory.PRIVACY: (
        "Your privacy is our top priority. All sessions are end-to-end encrypted and HIPAA compliant.",
        "We never store session recordings, and all your information is kept strictly confidential.",
        "You can review our full privacy policy to understand how we protect your data.",
    ),
    ResponseCategory.AI_FEATURES: (
        "Our AI companion provides 24/7 support between therapy sessions with personalized guidance.",
        "Smart mood tracking helps identify patterns and triggers in your emotional wellbeing.",
        "Real-time sentiment analysis ensures you get appropriate support when you need it most.",
        "Personalized recommendations are curated based on your progress and preferences.",
    ),
    ResponseCategory.PRICING: (
        "Our pricing varies depending on your needs. Please contact our billing team at "
        "billing@counselcare.com for detailed pricing information.",
    ),
    ResponseCategory.EMERGENCY: (
        "If you're experiencing a mental health crisis, please call 988 (Suicide & Crisis Lifeline) "
        "or contact emergency services immediately. For non-emergency urgent support, "
        "call our crisis line at 1-800-CRISIS-1.",
    ),
    ResponseCategory.CRISIS: (
        "I'm very concerned about what you've shared. Your safety is important. "
        "Let me connect you with immediate support resources.",
    ),
    ResponseCategory.EMPATHETIC_NEGATIVE: (
        "I can sense you might be going through a difficult time. Our AI companion and therapists "
        "are here to support you. Would you like me to connect you with some helpful resources?",
    ),
    ResponseCategory.EMPATHETIC_POSITIVE: (
        "I'm glad to hear you're feeling positive! It's wonderful when we can find moments of hope. "
        "How can I help you maintain this positive momentum?",
    ),
    ResponseCategory.SUPPORT_DEFAULT: (
        "That's a great question! For detailed information, I'd recommend contacting our support team.",
        "I understand you'd like to know more. Our support team can provide specific details about that.",
        "For the most accurate information about that topic, please reach out to our support team "
        "at support@counselcare.com",
    ),
}

CHATBOT_RULES: tuple[TopicRule, ...] = (
    TopicRule(ResponseCategory.GREETING, ("hello", "hi", "hey")),
    TopicRule(ResponseCategory.SERVICES, ("service", "therapy", "counseling")),
    TopicRule(ResponseCategory.SCHEDULING, ("schedule", "appointment", "book")),
    TopicRule(ResponseCategory.PRIVACY, ("private", "secure", "safe", "confidential")),
    TopicRule(ResponseCategory.AI_FEATURES, ("ai", "artificial intelligence", "smart", "companion")),
    TopicRule(ResponseCategory.PRICING, ("price", "cost", "billing")),
    TopicRule(ResponseCategory.EMERGENCY, ("emergency", "crisis", "urgent")),
)

CHATBOT_PROFILE = ResponseProfile(
    surface=ChatSurface.CHATBOT,
    topical_rules=CHATBOT_RULES,
    templates=CHATBOT_TEMPLATES,
    negative_category=ResponseCategory.EMPATHETIC_NEGATIVE,
    positive_category=ResponseCategory.EMPATHETIC_POSITIVE,
    default_category=ResponseCategory.SUPPORT_DEFAULT,
)


PROFILES: Mapping[ChatSurface, ResponseProfile] = MappingProxyType({
    ChatSurface.COMPANION: COMPANION_PROFILE,
    ChatSurface.CHATBOT: CHATBOT_PROFILE,
})


def get_profile(surface: ChatSurface) -> ResponseProfile:
    """
    Get the response profile for a chat surface.

    Raises:
        KeyError: If the surface has no conversational profile
    """
    return PROFILES[surface]
