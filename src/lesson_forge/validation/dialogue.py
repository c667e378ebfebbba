"""Dialogue turn-taking audit.

The learner's character must open every dialogue and must speak immediately
after every other character. The audit reports violations; it never edits
the dialogue.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from lesson_forge.models import DialogueContent

logger = logging.getLogger(__name__)


class DialogueEnforcement(str, Enum):
    """What happens when a generated dialogue breaks turn-taking."""

    LOG = "log"  # report only, lesson is kept
    REJECT = "reject"  # lesson is rejected with LessonRejectedError


class ViolationKind(str, Enum):
    LEARNER_NOT_FIRST = "learner_not_first"
    CONSECUTIVE_NON_LEARNER = "consecutive_non_learner"


@dataclass
class TurnTakingViolation:
    """A single turn-taking violation.

    Attributes:
        kind: Which rule was broken.
        position: Index of the offending line.
        speakers: The offending speaker(s): the opener, or the adjacent pair.
        exercise_title: Title of the dialogue exercise, when known.
    """

    kind: ViolationKind
    position: int
    speakers: tuple[str, ...]
    exercise_title: str = ""

    def __str__(self) -> str:
        where = f" in '{self.exercise_title}'" if self.exercise_title else ""
        if self.kind == ViolationKind.LEARNER_NOT_FIRST:
            return f"dialogue{where} opens with '{self.speakers[0]}' instead of the learner"
        first, second = self.speakers
        return (
            f"dialogue{where} has '{first}' followed by '{second}' at line {self.position} "
            f"without a learner turn"
        )

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "position": self.position,
            "speakers": list(self.speakers),
            "exerciseTitle": self.exercise_title,
        }


def _same_speaker(a: str, b: str) -> bool:
    return a.strip().lower() == b.strip().lower()


def audit_dialogue(
    content: DialogueContent, learner_name: str, exercise_title: str = ""
) -> list[TurnTakingViolation]:
    """Check one dialogue against the turn-taking rules.

    Args:
        content: Dialogue to audit; left unchanged.
        learner_name: Name of the learner's character (case-insensitive).
        exercise_title: Used in log messages.

    Returns:
        Violations in line order. Each one is also logged at WARNING.
    """
    speakers = content.speakers
    violations: list[TurnTakingViolation] = []
    if not speakers:
        return violations

    if not _same_speaker(speakers[0], learner_name):
        violations.append(
            TurnTakingViolation(
                kind=ViolationKind.LEARNER_NOT_FIRST,
                position=0,
                speakers=(speakers[0],),
                exercise_title=exercise_title,
            )
        )

    for i in range(1, len(speakers)):
        previous, current = speakers[i - 1], speakers[i]
        if not _same_speaker(previous, learner_name) and not _same_speaker(current, learner_name):
            violations.append(
                TurnTakingViolation(
                    kind=ViolationKind.CONSECUTIVE_NON_LEARNER,
                    position=i,
                    speakers=(previous, current),
                    exercise_title=exercise_title,
                )
            )

    for violation in violations:
        logger.warning(f"Turn-taking violation: {violation}")
    return violations
