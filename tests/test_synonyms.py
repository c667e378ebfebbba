"""Tests for synonym complexity ceilings."""

import logging

import pytest

from lesson_forge.models import (
    Exercise,
    GeneratedLesson,
    VocabularyContent,
    VocabularyItem,
)
from lesson_forge.validation.synonyms import (
    estimate_syllables,
    is_synonym_acceptable,
    sanitize_synonyms,
    synonym_rejection_reason,
)


def _lesson(*items):
    return GeneratedLesson(
        title="Test",
        lesson_type="conversation",
        difficulty=1,
        duration=50,
        objective="",
        exercises=[
            Exercise(type="vocabulary", title="Words", content=VocabularyContent(list(items))),
            Exercise(type="discussion", title="Talk", content=None),
        ],
    )


class TestEstimateSyllables:
    @pytest.mark.parametrize(
        "word,expected",
        [
            ("cat", 1),
            ("happy", 2),
            ("make", 1),
            ("table", 2),
            ("perambulate", 4),
            ("rhythm", 1),
            ("beautiful", 3),
        ],
    )
    def test_counts(self, word, expected):
        assert estimate_syllables(word) == expected

    def test_empty(self):
        assert estimate_syllables("  ") == 0


class TestSynonymRejection:
    def test_a1_ceilings(self):
        assert is_synonym_acceptable("glad", "A1")
        assert is_synonym_acceptable("hi", "A1")
        assert "syllables" in synonym_rejection_reason("perambulate", "A1")
        assert "characters" in synonym_rejection_reason("strengths", "A1")

    def test_a1_morphology(self):
        assert synonym_rejection_reason("creation", "A1") == "advanced morphology"
        assert is_synonym_acceptable("nice", "A1")

    def test_long_ate_words(self):
        assert synonym_rejection_reason("fortunate", "A2") is not None
        assert is_synonym_acceptable("late", "A2")

    def test_multi_word_rejected_at_a_levels(self):
        assert synonym_rejection_reason("get up", "A2") == "multi-word synonym"

    def test_multi_word_allowed_at_b1(self):
        assert is_synonym_acceptable("get up", "B1")

    def test_b1_checks_each_word(self):
        assert not is_synonym_acceptable("incomprehensibility issue", "B1")

    def test_b2_allows_longer_words(self):
        assert is_synonym_acceptable("information", "B2")
        assert not is_synonym_acceptable("information", "A2")

    def test_upper_tiers_unrestricted(self):
        assert is_synonym_acceptable("incomprehensibility", "C1")
        assert is_synonym_acceptable("incomprehensibility", "C2")

    def test_blank_synonym_is_fine(self):
        assert synonym_rejection_reason("", "A1") is None


class TestSanitizeSynonyms:
    def test_blanks_over_complex_synonyms_in_place(self, caplog):
        walk = VocabularyItem(word="walk", synonym="perambulate")
        happy = VocabularyItem(word="happy", synonym="glad")
        lesson = _lesson(walk, happy)

        with caplog.at_level(logging.INFO):
            findings, cleared = sanitize_synonyms(lesson, "A1")

        assert walk.synonym == ""
        assert happy.synonym == "glad"
        assert [(f.word, f.synonym) for f in findings] == [("walk", "perambulate")]
        assert cleared == 0
        assert "perambulate" in caplog.text

    def test_a1_clears_expressions(self):
        item = VocabularyItem(word="hello", expressions=["say hello"])
        findings, cleared = sanitize_synonyms(_lesson(item), "A1")
        assert item.expressions == []
        assert cleared == 1
        assert findings == []

    def test_a2_keeps_expressions(self):
        item = VocabularyItem(word="weekend", expressions=["at the weekend"])
        sanitize_synonyms(_lesson(item), "A2")
        assert item.expressions == ["at the weekend"]

    def test_finding_to_dict(self):
        findings, _ = sanitize_synonyms(_lesson(VocabularyItem("walk", synonym="perambulate")), "A1")
        d = findings[0].to_dict()
        assert d["level"] == "A1"
        assert d["reason"].startswith("4 syllables")

    def test_non_typed_vocabulary_content_skipped(self):
        lesson = _lesson()
        lesson.exercises[0].content = "free text"
        assert sanitize_synonyms(lesson, "A1") == ([], 0)
