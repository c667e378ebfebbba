"""Tests for the dialogue turn-taking audit."""

import copy
import logging

from lesson_forge.models import DialogueContent, DialogueLine
from lesson_forge.validation.dialogue import (
    DialogueEnforcement,
    ViolationKind,
    audit_dialogue,
)


def _dialogue(*speakers):
    return DialogueContent(
        dialogue=[DialogueLine(character=s, text=f"line {i}") for i, s in enumerate(speakers)]
    )


class TestAuditDialogue:
    def test_alternating_dialogue_is_clean(self):
        assert audit_dialogue(_dialogue("Ana", "Tom", "Ana", "Sue", "Ana"), "Ana") == []

    def test_learner_may_speak_twice(self):
        assert audit_dialogue(_dialogue("Ana", "Ana", "Tom", "Ana"), "Ana") == []

    def test_learner_not_first(self):
        violations = audit_dialogue(_dialogue("Tom", "Ana"), "Ana")
        assert len(violations) == 1
        assert violations[0].kind == ViolationKind.LEARNER_NOT_FIRST
        assert violations[0].speakers == ("Tom",)

    def test_two_consecutive_non_learner_lines(self, caplog):
        content = _dialogue("Learner", "Other1", "Other2", "Learner")
        before = copy.deepcopy(content)

        with caplog.at_level(logging.WARNING):
            violations = audit_dialogue(content, "Learner", "Exercise 2")

        assert len(violations) == 1
        assert violations[0].kind == ViolationKind.CONSECUTIVE_NON_LEARNER
        assert violations[0].position == 2
        assert violations[0].speakers == ("Other1", "Other2")
        assert content == before
        assert "Turn-taking violation" in caplog.text
        assert "'Exercise 2'" in caplog.text

    def test_learner_name_case_insensitive(self):
        assert audit_dialogue(_dialogue("maria ", "Tom", "MARIA"), "Maria") == []

    def test_both_rules_reported_in_order(self):
        violations = audit_dialogue(_dialogue("Tom", "Sue", "Ana"), "Ana")
        assert [v.kind for v in violations] == [
            ViolationKind.LEARNER_NOT_FIRST,
            ViolationKind.CONSECUTIVE_NON_LEARNER,
        ]

    def test_empty_dialogue(self):
        assert audit_dialogue(DialogueContent(), "Ana") == []

    def test_violation_to_dict(self):
        violation = audit_dialogue(_dialogue("Ana", "Tom", "Sue"), "Ana", "Talk")[0]
        assert violation.to_dict() == {
            "kind": "consecutive_non_learner",
            "position": 2,
            "speakers": ["Tom", "Sue"],
            "exerciseTitle": "Talk",
        }
        assert "without a learner turn" in str(violation)


class TestDialogueEnforcement:
    def test_values(self):
        assert DialogueEnforcement("log") is DialogueEnforcement.LOG
        assert DialogueEnforcement("reject") is DialogueEnforcement.REJECT
