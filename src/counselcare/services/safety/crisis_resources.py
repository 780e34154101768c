"""
Crisis Resources

Lines and services listed alongside every crisis escalation, keyed by
ISO country code. The built-in directory carries the US lines offered
by the CounselCare crisis modal; other countries can be supplied from
a JSON file of the form:

    {"GB": [{"label": "Samaritans", "reach": "call 116 123", "emergency": true}]}

LEGAL_REVIEW_REQUIRED: Every number must be verified before it is
shown to people in crisis.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

from counselcare.config.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CrisisContact:
    """
    One way to reach help.

    Attributes:
        label: Who answers (e.g., "988 Suicide & Crisis Lifeline")
        reach: How to reach them (e.g., "call or text 988")
        emergency: True for lines meant for immediate danger
    """

    label: str
    reach: str
    emergency: bool = False

    def describe(self) -> str:
        return f"- {self.label}: {self.reach}"


US_CONTACTS: tuple[CrisisContact, ...] = (
    CrisisContact("988 Suicide & Crisis Lifeline", "call or text 988", emergency=True),
    CrisisContact("Crisis Text Line", "text HOME to 741741", emergency=True),
    CrisisContact(
        "CounselCare crisis line",
        "1-800-CRISIS-1 for non-emergency urgent support",
    ),
    CrisisContact("Lifeline online chat", "https://suicidepreventionlifeline.org/"),
)

# Shown when no lines are known for the session's country
FALLBACK_CONTACTS: tuple[CrisisContact, ...] = (
    CrisisContact("Emergency services", "call your local emergency number", emergency=True),
    CrisisContact(
        "International crisis centres",
        "https://www.iasp.info/resources/Crisis_Centres/",
    ),
)

CRISIS_MESSAGE_HEADER = "If you're in crisis, please reach out now:"
CRISIS_MESSAGE_FOOTER = "Remember: You are not alone, and help is always available."


def parse_contacts(data: Any) -> dict[str, tuple[CrisisContact, ...]]:
    """
    Parse a country-keyed contact mapping.

    Raises:
        ValueError: If the document does not have the expected shape
    """
    if not isinstance(data, dict):
        raise ValueError("crisis resources must be an object keyed by country code")

    parsed = {}
    for country_code, entries in data.items():
        if not isinstance(entries, list) or not entries:
            raise ValueError(f"'{country_code}' must map to a non-empty list")
        contacts = []
        for entry in entries:
            if not isinstance(entry, dict) or not entry.get("label") or not entry.get("reach"):
                raise ValueError(f"'{country_code}' entries need a label and a reach")
            contacts.append(CrisisContact(
                label=str(entry["label"]),
                reach=str(entry["reach"]),
                emergency=bool(entry.get("emergency", False)),
            ))
        parsed[str(country_code).upper()] = tuple(contacts)
    return parsed


class CrisisResourceDirectory:
    """
    Country lookup for crisis contacts.

    An unreadable or malformed override file is logged and ignored:
    escalation must never lose its resources because of it.

    Usage:
        directory = CrisisResourceDirectory()
        text = directory.format_crisis_message("US")
    """

    def __init__(self, overrides_path: Optional[str] = None) -> None:
        contacts = {"US": US_CONTACTS}
        if overrides_path:
            contacts.update(self._read_overrides(Path(overrides_path)))
        self._contacts: Mapping[str, tuple[CrisisContact, ...]] = MappingProxyType(contacts)

    @staticmethod
    def _read_overrides(path: Path) -> dict[str, tuple[CrisisContact, ...]]:
        if not path.exists():
            logger.warning("Crisis resources file not found", path=str(path))
            return {}
        try:
            overrides = parse_contacts(json.loads(path.read_text(encoding="utf-8")))
        except (OSError, ValueError) as e:
            logger.error("Ignoring crisis resources file", path=str(path), error=str(e))
            return {}

        logger.info("Loaded crisis resources", path=str(path), countries=sorted(overrides))
        return overrides

    @property
    def countries(self) -> tuple[str, ...]:
        return tuple(sorted(self._contacts))

    def contacts_for(self, country_code: Optional[str]) -> tuple[CrisisContact, ...]:
        """Contacts for a country, or the fallback list when it is unknown."""
        contacts = self._contacts.get((country_code or "").upper())
        if contacts is None:
            logger.warning("No crisis contacts for country", country_code=country_code)
            return FALLBACK_CONTACTS
        return contacts

    def format_crisis_message(self, country_code: Optional[str] = "US") -> str:
        """Text attached to escalation signals, emergency lines first."""
        contacts = self.contacts_for(country_code)
        ordered = [c for c in contacts if c.emergency] + [c for c in contacts if not c.emergency]
        lines = [CRISIS_MESSAGE_HEADER]
        lines.extend(contact.describe() for contact in ordered)
        lines.append(CRISIS_MESSAGE_FOOTER)
        return "\n".join(lines)
