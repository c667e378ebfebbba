"""CEFR tier policies and the dispatcher that routes to them."""

from lesson_forge.levels.a1 import A1Policy
from lesson_forge.levels.a2 import A2Policy
from lesson_forge.levels.b1 import B1Policy
from lesson_forge.levels.b2 import B2Policy
from lesson_forge.levels.base import LevelPolicy
from lesson_forge.levels.c1 import C1Policy
from lesson_forge.levels.c2 import C2Policy
from lesson_forge.levels.dispatcher import LessonPolicyDispatcher, default_policies
from lesson_forge.levels.word_level import WordFeatures, estimate_cefr_level

__all__ = [
    "LevelPolicy",
    "A1Policy",
    "A2Policy",
    "B1Policy",
    "B2Policy",
    "C1Policy",
    "C2Policy",
    "LessonPolicyDispatcher",
    "default_policies",
    "WordFeatures",
    "estimate_cefr_level",
]
