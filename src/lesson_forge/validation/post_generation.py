"""Advisory checks run on a decoded lesson before it is handed back.

Two independent passes:
- synonym sanitization (mutates: over-complex synonyms are blanked)
- dialogue turn-taking audit (read-only: violations are logged)

Neither pass raises; a usable lesson is never discarded here. Whether
turn-taking violations reject the lesson is decided by the caller from the
returned report.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from lesson_forge.constants.levels import DEFAULT_LEARNER_NAME, EXERCISE_DIALOGUE
from lesson_forge.models import DialogueContent, GeneratedLesson, LearnerProfile
from lesson_forge.validation.dialogue import TurnTakingViolation, audit_dialogue
from lesson_forge.validation.synonyms import SynonymFinding, sanitize_synonyms

logger = logging.getLogger(__name__)


@dataclass
class ValidationReport:
    """Findings of one validation run."""

    synonym_findings: list[SynonymFinding] = field(default_factory=list)
    turn_taking_violations: list[TurnTakingViolation] = field(default_factory=list)
    cleared_expressions: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def has_turn_taking_violations(self) -> bool:
        return bool(self.turn_taking_violations)

    @property
    def is_clean(self) -> bool:
        return not (self.synonym_findings or self.turn_taking_violations or self.errors)

    def to_dict(self) -> dict:
        return {
            "synonymFindings": [f.to_dict() for f in self.synonym_findings],
            "turnTakingViolations": [v.to_dict() for v in self.turn_taking_violations],
            "clearedExpressions": self.cleared_expressions,
            "errors": list(self.errors),
        }


class PostGenerationValidator:
    """Runs the synonym and dialogue passes over a freshly decoded lesson."""

    def validate(self, lesson: GeneratedLesson, profile: LearnerProfile) -> ValidationReport:
        report = ValidationReport()

        try:
            findings, cleared = sanitize_synonyms(lesson, profile.level)
            report.synonym_findings.extend(findings)
            report.cleared_expressions = cleared
        except Exception as e:
            logger.error(f"Synonym pass failed for '{lesson.title}': {e}")
            report.errors.append(f"synonym pass: {e}")

        try:
            report.turn_taking_violations.extend(self._audit_dialogues(lesson, profile))
        except Exception as e:
            logger.error(f"Dialogue audit failed for '{lesson.title}': {e}")
            report.errors.append(f"dialogue audit: {e}")

        if report.synonym_findings or report.turn_taking_violations:
            logger.info(
                f"Validated '{lesson.title}': {len(report.synonym_findings)} synonym(s) blanked, "
                f"{len(report.turn_taking_violations)} turn-taking violation(s)"
            )
        return report

    @staticmethod
    def _audit_dialogues(
        lesson: GeneratedLesson, profile: LearnerProfile
    ) -> list[TurnTakingViolation]:
        learner = profile.name or DEFAULT_LEARNER_NAME
        violations: list[TurnTakingViolation] = []
        for exercise in lesson.exercises_of_type(EXERCISE_DIALOGUE):
            if isinstance(exercise.content, DialogueContent):
                violations.extend(audit_dialogue(exercise.content, learner, exercise.title))
        return violations
