"""Synonym complexity ceilings per CEFR tier.

Providers often offer a synonym harder than the headword itself
("walk" -> "perambulate"). Synonyms above the tier ceiling are blanked in
place; they are never replaced with a guess.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from lesson_forge.constants.levels import (
    EXERCISE_VOCABULARY,
    LEVEL_A1,
    LEVEL_A2,
    LEVEL_B1,
    LEVEL_B2,
)
from lesson_forge.models import GeneratedLesson, VocabularyContent

logger = logging.getLogger(__name__)

_VOWEL_GROUP_RE = re.compile(r"[aeiouy]+")

# (max syllables, max characters); None means unrestricted
SYNONYM_CEILINGS: dict[str, tuple[int | None, int | None]] = {
    LEVEL_A1: (2, 8),
    LEVEL_A2: (3, 10),
    LEVEL_B1: (4, None),
    LEVEL_B2: (6, None),
}

# Tiers where a synonym must be a single word
SINGLE_WORD_LEVELS = frozenset({LEVEL_A1, LEVEL_A2})

# Tiers where Latinate/academic morphology is rejected
MORPHOLOGY_CHECK_LEVELS = frozenset({LEVEL_A1, LEVEL_A2})

ADVANCED_SUFFIXES = (
    "tion", "sion", "ment", "ity", "ology", "ism", "ious", "eous",
    "ize", "ise", "ify", "ance", "ence", "ous", "ive", "ible", "able",
)
ADVANCED_PREFIXES = ("inter", "trans", "circum", "pseudo", "multi", "counter", "super")
# "-ate" only marks advanced words when they are long (perambulate, not late)
LONG_ATE_MIN_LENGTH = 7


@dataclass
class SynonymFinding:
    """A synonym blanked for exceeding the tier ceiling."""

    word: str
    synonym: str
    level: str
    reason: str

    def to_dict(self) -> dict:
        return {"word": self.word, "synonym": self.synonym, "level": self.level, "reason": self.reason}


def estimate_syllables(word: str) -> int:
    """Estimate syllables by counting vowel groups.

    A trailing silent "e" (but not "-le") is discounted when the word has more
    than one group. Every non-empty word has at least one syllable.
    """
    word = word.lower().strip()
    if not word:
        return 0
    count = len(_VOWEL_GROUP_RE.findall(word))
    if count > 1 and word.endswith("e") and not word.endswith("le"):
        count -= 1
    return max(1, count)


def _has_advanced_morphology(word: str) -> bool:
    if word.endswith("ate") and len(word) >= LONG_ATE_MIN_LENGTH:
        return True
    # Suffix must leave a stem, so short words like "nice" or "live" pass
    for suffix in ADVANCED_SUFFIXES:
        if word.endswith(suffix) and len(word) - len(suffix) >= 3:
            return True
    return any(word.startswith(prefix) and len(word) > len(prefix) + 2 for prefix in ADVANCED_PREFIXES)


def synonym_rejection_reason(synonym: str, level: str) -> str | None:
    """Why a synonym is too complex for the tier, or None if it is acceptable."""
    text = synonym.strip().lower()
    if not text:
        return None

    words = text.split()
    if len(words) > 1:
        if level in SINGLE_WORD_LEVELS:
            return "multi-word synonym"
        # Longer tiers judge each word of the phrase on its own
        for part in words:
            reason = synonym_rejection_reason(part, level)
            if reason:
                return reason
        return None

    max_syllables, max_chars = SYNONYM_CEILINGS.get(level, (None, None))
    syllables = estimate_syllables(text)
    if max_syllables is not None and syllables > max_syllables:
        return f"{syllables} syllables (max {max_syllables})"
    if max_chars is not None and len(text) > max_chars:
        return f"{len(text)} characters (max {max_chars})"
    if level in MORPHOLOGY_CHECK_LEVELS and _has_advanced_morphology(text):
        return "advanced morphology"
    return None


def is_synonym_acceptable(synonym: str, level: str) -> bool:
    return synonym_rejection_reason(synonym, level) is None


def sanitize_synonyms(lesson: GeneratedLesson, level: str) -> tuple[list[SynonymFinding], int]:
    """Blank over-complex synonyms in every vocabulary exercise, in place.

    At A1 the expressions of every item are also cleared.

    Returns:
        (findings, number of items whose expressions were cleared)
    """
    findings: list[SynonymFinding] = []
    cleared_expressions = 0

    for exercise in lesson.exercises_of_type(EXERCISE_VOCABULARY):
        if not isinstance(exercise.content, VocabularyContent):
            continue
        for item in exercise.content.vocabulary:
            if item.synonym:
                reason = synonym_rejection_reason(item.synonym, level)
                if reason:
                    findings.append(
                        SynonymFinding(word=item.word, synonym=item.synonym, level=level, reason=reason)
                    )
                    logger.info(
                        f"Blanked {level} synonym '{item.synonym}' for '{item.word}': {reason}"
                    )
                    item.synonym = ""
            if level == LEVEL_A1 and item.expressions:
                item.expressions = []
                cleared_expressions += 1

    return findings, cleared_expressions
