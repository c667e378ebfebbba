"""Tests for vocabulary continuity across shared lessons."""

import logging
from datetime import datetime, timedelta, timezone

import pytest

from lesson_forge.continuity import (
    ContinuityContext,
    PreviousVocabulary,
    VocabularyContinuityTracker,
    extract_vocabulary_from_lesson,
    merge_vocabulary,
)
from lesson_forge.storage import InMemoryLessonStore, LessonStore

START = datetime(2024, 5, 1, tzinfo=timezone.utc)


def _content(*words):
    return {
        "exercises": [
            {"type": "dialogue", "content": {}},
            {
                "type": "vocabulary",
                "content": {
                    "vocabulary": [
                        {"word": w, "definition": f"meaning of {w}", "partOfSpeech": "Noun"}
                        for w in words
                    ]
                },
            },
        ]
    }


@pytest.fixture
def store():
    """Three lessons shared one day apart; "Week 3" is the most recent."""
    store = InMemoryLessonStore()
    for i, words in enumerate([("alpha",), ("beta",), ("gamma", "delta")], start=1):
        store.add_shared_lesson(
            "learner-1", f"lesson-{i}", f"Week {i}", _content(*words), START + timedelta(days=i)
        )
    return store


class FailingStore(LessonStore):
    def list_shared_lessons(self, learner_id, limit=None):
        raise ConnectionError("database unavailable")


class TestGetContinuityContext:
    def test_no_lessons(self):
        context = VocabularyContinuityTracker(InMemoryLessonStore()).get_continuity_context("x")
        assert context == ContinuityContext()
        assert context.should_reuse is False

    def test_immediately_preceding_lesson_is_reused(self):
        store = InMemoryLessonStore()
        store.add_shared_lesson("learner-1", "l1", "Greetings", _content("hello", "family"))

        context = VocabularyContinuityTracker(store).get_continuity_context("learner-1")

        assert context.should_reuse is True
        assert context.lessons_since_last_shared == 0
        assert context.previous_lesson_title == "Greetings"
        assert context.words == ["hello", "family"]

    def test_uses_most_recent_lesson(self, store):
        context = VocabularyContinuityTracker(store).get_continuity_context("learner-1")
        assert context.previous_lesson_title == "Week 3"
        assert context.words == ["gamma", "delta"]
        assert context.lessons_since_last_shared == 2
        assert context.should_reuse is True

    def test_beyond_window_is_not_reused(self, store):
        store.add_shared_lesson("learner-1", "lesson-4", "Week 4", _content("epsilon"), START + timedelta(days=4))

        context = VocabularyContinuityTracker(store, lookback=4).get_continuity_context("learner-1")

        assert context.lessons_since_last_shared == 3
        assert context.should_reuse is False
        assert context.previous_vocabulary == []
        assert context.previous_lesson_title == "Week 4"

    def test_store_error_yields_empty_context(self, caplog):
        with caplog.at_level(logging.ERROR):
            context = VocabularyContinuityTracker(FailingStore()).get_continuity_context("learner-1")
        assert context == ContinuityContext()
        assert "database unavailable" in caplog.text

    def test_malformed_content_yields_no_vocabulary(self):
        store = InMemoryLessonStore()
        store.add_shared_lesson("learner-1", "l1", "Broken", {"exercises": "nope"})
        context = VocabularyContinuityTracker(store).get_continuity_context("learner-1")
        assert context.should_reuse is True
        assert context.previous_vocabulary == []


class TestVocabularyHistory:
    def test_history_newest_first(self, store):
        history = VocabularyContinuityTracker(store).get_vocabulary_history("learner-1")
        assert [entry.lesson_title for entry in history] == ["Week 3", "Week 2", "Week 1"]
        assert history[0].shared_at == START + timedelta(days=3)

    def test_history_store_error(self):
        assert VocabularyContinuityTracker(FailingStore()).get_vocabulary_history("x") == []


class TestExtractVocabulary:
    def test_first_vocabulary_exercise_only(self):
        content = _content("one")
        content["exercises"].append(_content("two")["exercises"][1])
        assert [v.word for v in extract_vocabulary_from_lesson(content)] == ["one"]

    def test_items_without_definition_skipped(self):
        content = {
            "exercises": [
                {
                    "type": "vocabulary",
                    "content": {
                        "vocabulary": [
                            {"word": "kept", "definition": "yes", "example": "It was kept."},
                            {"word": "dropped"},
                            {"word": 3, "definition": "no"},
                            "bare",
                        ]
                    },
                }
            ]
        }
        items = extract_vocabulary_from_lesson(content)
        assert items == [PreviousVocabulary(word="kept", definition="yes", example="It was kept.")]

    @pytest.mark.parametrize("content", [None, [], {}, {"exercises": [{"type": "vocabulary"}]}])
    def test_malformed(self, content):
        assert extract_vocabulary_from_lesson(content) == []


class TestMergeVocabulary:
    def test_dedupes_case_insensitively_keeping_first(self):
        first = [PreviousVocabulary("Hello", "greeting")]
        second = [PreviousVocabulary("hello", "other"), PreviousVocabulary("family", "relatives")]
        merged = merge_vocabulary([first, second])
        assert [(v.word, v.definition) for v in merged] == [
            ("Hello", "greeting"),
            ("family", "relatives"),
        ]
