"""Routes tier-dependent calls to the matching LevelPolicy.

The dispatcher is the only place that looks at a learner's tier code; call
sites never branch on tier strings themselves.
"""

from __future__ import annotations

import logging
from typing import Mapping

from lesson_forge.errors import UnsupportedTierError
from lesson_forge.levels.a1 import A1Policy
from lesson_forge.levels.a2 import A2Policy
from lesson_forge.levels.b1 import B1Policy
from lesson_forge.levels.b2 import B2Policy
from lesson_forge.levels.base import LevelPolicy
from lesson_forge.levels.c1 import C1Policy
from lesson_forge.levels.c2 import C2Policy
from lesson_forge.models import GeneratedLesson, LearnerProfile, LearningTopic

logger = logging.getLogger(__name__)


def default_policies() -> dict[str, LevelPolicy]:
    """One policy instance per CEFR tier, keyed by tier code."""
    policies: list[LevelPolicy] = [
        A1Policy(),
        A2Policy(),
        B1Policy(),
        B2Policy(),
        C1Policy(),
        C2Policy(),
    ]
    return {policy.level: policy for policy in policies}


class LessonPolicyDispatcher:
    """Tier code -> LevelPolicy lookup.

    Args:
        policies: Optional alternative map. Defaults to all six CEFR tiers.
    """

    def __init__(self, policies: Mapping[str, LevelPolicy] | None = None):
        self._policies = dict(policies) if policies is not None else default_policies()

    @property
    def supported_levels(self) -> list[str]:
        return list(self._policies)

    def get_policy(self, level: str) -> LevelPolicy:
        """Return the policy for a tier code.

        Raises:
            UnsupportedTierError: If no policy is registered for the tier.
        """
        policy = self._policies.get(level)
        if policy is None:
            raise UnsupportedTierError(level)
        return policy

    def generate_lesson(
        self, profile: LearnerProfile, topic: LearningTopic, duration: int
    ) -> GeneratedLesson:
        """Build the deterministic template lesson for the learner's tier."""
        policy = self.get_policy(profile.level)
        logger.debug(f"Dispatching template lesson '{topic.title}' to {policy!r}")
        return policy.generate_lesson(profile, topic, duration)

    def get_vocabulary_for_level(self, level: str, words: list[str]) -> list[str]:
        return self.get_policy(level).get_vocabulary_for_level(words)
