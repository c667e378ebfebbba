"""Rule-based CEFR level estimate for a single word.

Used for offline vocabulary auditing. The estimate only distinguishes A1..C1;
C2 vocabulary is indistinguishable from C1 by these features.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from lesson_forge.constants.levels import LEVEL_A1, LEVEL_A2, LEVEL_B1, LEVEL_B2, LEVEL_C1


class Frequency(str, Enum):
    VERY_COMMON = "very-common"
    MODERATE = "moderate"
    RARE = "rare"


class Concreteness(str, Enum):
    CONCRETE = "concrete"
    ABSTRACT = "abstract"


class Formality(str, Enum):
    EVERYDAY = "everyday"
    PROFESSIONAL = "professional"


class Morphology(str, Enum):
    SIMPLE = "simple"
    COMPLEX = "complex"


class Domain(str, Enum):
    GENERAL = "general"
    SPECIALIZED = "specialized"


@dataclass(frozen=True)
class WordFeatures:
    """Coarse lexical features of a word."""

    frequency: Frequency
    concreteness: Concreteness
    formality: Formality = Formality.EVERYDAY
    figurative: bool = False
    morphology: Morphology = Morphology.SIMPLE
    domain: Domain = Domain.GENERAL

    @classmethod
    def from_dict(cls, data: dict) -> WordFeatures:
        return cls(
            frequency=Frequency(data["frequency"]),
            concreteness=Concreteness(data["concreteness"]),
            formality=Formality(data.get("formality", Formality.EVERYDAY.value)),
            figurative=bool(data.get("figurative", False)),
            morphology=Morphology(
                data.get("morphologicalComplexity", data.get("morphology", Morphology.SIMPLE.value))
            ),
            domain=Domain(
                data.get("domainSpecificity", data.get("domain", Domain.GENERAL.value))
            ),
        )


def estimate_cefr_level(features: WordFeatures) -> str:
    """Estimate the CEFR level of a word from its features.

    Rules are checked in order:
        A1: very common, concrete, everyday, literal, simple, general
        A2: very common and concrete
        B1: very common and abstract
        B2: moderate frequency, complex morphology or specialized domain
        C1: everything else
    """
    very_common = features.frequency == Frequency.VERY_COMMON
    concrete = features.concreteness == Concreteness.CONCRETE

    if (
        very_common
        and concrete
        and features.formality == Formality.EVERYDAY
        and not features.figurative
        and features.morphology == Morphology.SIMPLE
        and features.domain == Domain.GENERAL
    ):
        return LEVEL_A1
    if very_common and concrete:
        return LEVEL_A2
    if very_common:
        return LEVEL_B1
    if (
        features.frequency == Frequency.MODERATE
        or features.morphology == Morphology.COMPLEX
        or features.domain == Domain.SPECIALIZED
    ):
        return LEVEL_B2
    return LEVEL_C1
