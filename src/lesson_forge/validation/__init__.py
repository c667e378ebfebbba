"""Post-generation validation of decoded lessons."""

from lesson_forge.validation.dialogue import (
    DialogueEnforcement,
    TurnTakingViolation,
    ViolationKind,
    audit_dialogue,
)
from lesson_forge.validation.post_generation import PostGenerationValidator, ValidationReport
from lesson_forge.validation.synonyms import (
    SynonymFinding,
    estimate_syllables,
    is_synonym_acceptable,
    sanitize_synonyms,
)
from lesson_forge.validation.vocabulary_audit import find_off_level_words

__all__ = [
    "PostGenerationValidator",
    "ValidationReport",
    "DialogueEnforcement",
    "TurnTakingViolation",
    "ViolationKind",
    "audit_dialogue",
    "SynonymFinding",
    "estimate_syllables",
    "is_synonym_acceptable",
    "sanitize_synonyms",
    "find_off_level_words",
]
