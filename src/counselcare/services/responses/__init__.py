"""Response selection package."""

from counselcare.services.responses.response_selector import (
    ResponseSelection,
    ResponseSelector,
)
from counselcare.services.responses.response_templates import (
    CHATBOT_PROFILE,
    COMPANION_PROFILE,
    PROFILES,
    ResponseProfile,
    TopicRule,
    get_profile,
)

__all__ = [
    "ResponseSelection",
    "ResponseSelector",
    "CHATBOT_PROFILE",
    "COMPANION_PROFILE",
    "PROFILES",
    "ResponseProfile",
    "TopicRule",
    "get_profile",
]
