"""
Lexicon

Shared keyword and phrase sets used by the sentiment classifier,
the risk assessor and contact triage.

CLINICAL_REVIEW_REQUIRED: All word lists should be reviewed by
mental health professionals before production use.

KNOWN LIMITATION: Entries match by substring containment, not word
boundaries ("hi" matches "this"). This is deliberate for parity
with the deployed web client and must not be silently changed.
"""

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Iterable, Mapping, Optional

from counselcare.config.logging_config import get_logger

logger = get_logger(__name__)


class LexiconMissingError(Exception):
    """
    Raised when a lexicon category is absent or empty.

    This is the only fatal condition of the engine: it indicates
    misconfiguration and must surface at initialization time.
    """

    def __init__(self, message: str, category: Optional[str] = None) -> None:
        super().__init__(message)
        self.category = category


def _normalize_entries(entries: Iterable[str]) -> tuple[str, ...]:
    """Lowercase, strip and de-duplicate while keeping first-seen order."""
    seen: dict[str, None] = {}
    for entry in entries:
        if not isinstance(entry, str):
            continue
        normalized = entry.strip().lower()
        if normalized:
            seen.setdefault(normalized, None)
    return tuple(seen)


@dataclass(frozen=True)
class Lexicon:
    """
    Immutable category -> ordered entry mapping.

    Entry order matters: the risk assessor reports the first matching
    phrase in lexicon order.

    Attributes:
        positive: Positive-affect keywords
        negative: Negative-affect keywords
        crisis_words: Single crisis keywords
        crisis_phrases: Multi-word crisis expressions
        high_risk_phrases: Phrases escalating risk to HIGH
        medium_risk_phrases: Phrases raising risk to MEDIUM
    """

    positive: tuple[str, ...]
    negative: tuple[str, ...]
    crisis_words: tuple[str, ...]
    crisis_phrases: tuple[str, ...]
    high_risk_phrases: tuple[str, ...]
    medium_risk_phrases: tuple[str, ...]

    # External category names used in JSON lexicon files
    CATEGORY_KEYS = {
        "positive": "positive",
        "negative": "negative",
        "crisisWord": "crisis_words",
        "crisisPhrase": "crisis_phrases",
        "highRiskPhrase": "high_risk_phrases",
        "mediumRiskPhrase": "medium_risk_phrases",
    }

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, str):
                raise LexiconMissingError(
                    f"Lexicon category '{f.name}' must be a sequence of strings",
                    category=f.name,
                )
            entries = _normalize_entries(value)
            if not entries:
                raise LexiconMissingError(
                    f"Lexicon category '{f.name}' is empty",
                    category=f.name,
                )
            object.__setattr__(self, f.name, entries)

    @property
    def crisis_terms(self) -> tuple[str, ...]:
        """Crisis words followed by crisis phrases."""
        return self.crisis_words + self.crisis_phrases

    @classmethod
    def from_mapping(cls, data: Mapping[str, Iterable[str]]) -> "Lexicon":
        """
        Build a lexicon from external category names.

        Args:
            data: Mapping keyed by positive, negative, crisisWord,
                crisisPhrase, highRiskPhrase, mediumRiskPhrase

        Raises:
            LexiconMissingError: If a category is absent or empty
        """
        kwargs = {}
        for external, attribute in cls.CATEGORY_KEYS.items():
            if external not in data:
                raise LexiconMissingError(
                    f"Lexicon category '{external}' is missing",
                    category=external,
                )
            entries = data[external]
            # A bare string would otherwise be split into single letters
            if not isinstance(entries, (list, tuple)):
                raise LexiconMissingError(
                    f"Lexicon category '{external}' must be a list of strings",
                    category=external,
                )
            kwargs[attribute] = tuple(entries)
        return cls(**kwargs)

    @classmethod
    def from_file(cls, path: str | Path) -> "Lexicon":
        """
        Load a lexicon from a JSON file.

        Raises:
            LexiconMissingError: If the file is unreadable or incomplete
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise LexiconMissingError(f"Cannot load lexicon from {path}: {e}") from e

        if not isinstance(data, dict):
            raise LexiconMissingError(f"Lexicon file {path} must contain an object")

        lexicon = cls.from_mapping(data)
        logger.info(
            "Loaded lexicon",
            path=str(path),
            crisis_terms=len(lexicon.crisis_terms),
        )
        return lexicon

    def to_mapping(self) -> dict[str, list[str]]:
        return {
            external: list(getattr(self, attribute))
            for external, attribute in self.CATEGORY_KEYS.items()
        }


# CLINICAL_REVIEW_REQUIRED: Validate and expand these lists
DEFAULT_LEXICON = Lexicon(
    positive=(
        "happy", "good", "great", "excellent", "wonderful", "amazing",
        "love", "joy", "excited", "grateful", "thankful", "better",
        "improving", "hopeful", "positive", "confident", "peaceful",
        "calm", "relaxed", "content", "satisfied",
    ),
    negative=(
        "sad", "depressed", "anxious", "worried", "stressed", "angry",
        "frustrated", "hopeless", "terrible", "awful", "hate", "worse",
        "struggling", "overwhelmed", "lonely", "scared", "afraid",
        "panic", "crisis", "desperate", "worthless",
    ),
    # SAFETY_CRITICAL: Any match labels the message as crisis
    crisis_words=(
        "suicide", "hopeless", "worthless",
    ),
    crisis_phrases=(
        "kill myself", "end it all", "hurt myself", "can't go on",
        "want to die", "end my life", "not worth living", "better off dead",
        "can't take it anymore", "want to disappear", "no point", "give up",
    ),
    high_risk_phrases=(
        "want to hurt myself", "thinking about suicide", "can't take it anymore",
        "no one would miss me", "planning to end", "have a plan",
    ),
    medium_risk_phrases=(
        "feeling hopeless", "very depressed", "severe anxiety", "panic attacks",
        "can't cope", "everything is falling apart", "losing control",
    ),
)


def load_lexicon(path: Optional[str] = None) -> Lexicon:
    """
    Resolve the lexicon for this process.

    Args:
        path: Optional JSON override file

    Returns:
        The override lexicon if a path is given, else DEFAULT_LEXICON
    """
    if path:
        return Lexicon.from_file(path)
    return DEFAULT_LEXICON
