"""
Response Selector

Chooses a template response for a non-crisis turn.

Decision order:
1. Topical rules of the surface profile, first match wins
2. Sentiment fallback (negative / positive)
3. Contextual follow-up over the most recent history entries
4. Profile default category

The category decision is deterministic. Only the template inside a
category is picked at random, through an injected random source.
"""

import random
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from counselcare.domain.enums.classification import SentimentLabel
from counselcare.domain.enums.conversation import ResponseCategory
from counselcare.domain.models.assessment import SentimentResult
from counselcare.domain.models.message import Message
from counselcare.services.detection.sentiment_classifier import normalize_text
from counselcare.services.responses.response_templates import (
    COMPANION_PROFILE,
    ResponseProfile,
)


@dataclass(frozen=True)
class ResponseSelection:
    """Category decision together with the chosen template text."""

    category: ResponseCategory
    text: str


class ResponseSelector:
    """
    Rule-based template selection for one chat surface.

    Usage:
        selector = ResponseSelector(CHATBOT_PROFILE, rng=random.Random(7))
        text = selector.select_response("How do I book?", sentiment, history)
    """

    DEFAULT_FOLLOW_UP_LOOKBACK: int = 5

    def __init__(
        self,
        profile: ResponseProfile = COMPANION_PROFILE,
        rng: Optional[random.Random] = None,
        follow_up_lookback: int = DEFAULT_FOLLOW_UP_LOOKBACK,
    ) -> None:
        """
        Initialize response selector.

        Args:
            profile: Surface rules and templates
            rng: Random source for template choice (seed it in tests)
            follow_up_lookback: History entries scanned by follow-up rules
        """
        self._profile = profile
        self._rng = rng or random.Random()
        self._follow_up_lookback = follow_up_lookback

    @property
    def profile(self) -> ResponseProfile:
        return self._profile

    def select_category(
        self,
        text: Any,
        sentiment: SentimentResult,
        history: Iterable[Message] = (),
    ) -> ResponseCategory:
        """
        Decide the response category for a message.

        Args:
            text: Current user message
            sentiment: Classifier output for the message
            history: Conversation so far, oldest first

        Returns:
            First matching category in decision order
        """
        text_lower = normalize_text(text)

        for rule in self._profile.topical_rules:
            if rule.matches(text_lower):
                return rule.category

        if sentiment.label == SentimentLabel.NEGATIVE:
            return self._profile.negative_category
        if sentiment.label == SentimentLabel.POSITIVE:
            return self._profile.positive_category

        if self._profile.follow_up_rules and self._follow_up_lookback > 0:
            recent = list(history)[-self._follow_up_lookback:]
            recent_text = [normalize_text(message.text) for message in recent]
            for rule in self._profile.follow_up_rules:
                if any(rule.matches(entry) for entry in recent_text):
                    return rule.category

        return self._profile.default_category

    def choose(self, category: ResponseCategory) -> str:
        """Pick one template of a category uniformly at random."""
        return self._rng.choice(self._profile.templates_for(category))

    def select(
        self,
        text: Any,
        sentiment: SentimentResult,
        history: Iterable[Message] = (),
    ) -> ResponseSelection:
        category = self.select_category(text, sentiment, history)
        return ResponseSelection(category=category, text=self.choose(category))

    def select_response(
        self,
        text: Any,
        sentiment: SentimentResult,
        history: Iterable[Message] = (),
    ) -> str:
        """Select the response text for a non-crisis turn."""
        return self.select(text, sentiment, history).text

    def crisis_response(self) -> ResponseSelection:
        """Select a template from the profile's crisis category."""
        category = self._profile.crisis_category
        return ResponseSelection(category=category, text=self.choose(category))
