"""Vocabulary continuity across a learner's sequential lessons.

Vocabulary taught in the most recently shared lesson is offered to the next
lesson for natural reuse in its dialogue (not re-taught), as long as that
lesson is recent enough. Lookups go through the LessonStore interface and
never fail the generation flow: any store error yields the empty context.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable

from lesson_forge.constants.levels import (
    CONTINUITY_LOOKBACK,
    CONTINUITY_MAX_LESSONS_BACK,
    EXERCISE_VOCABULARY,
)
from lesson_forge.storage.lesson_store import LessonStore

logger = logging.getLogger(__name__)


@dataclass
class PreviousVocabulary:
    """A vocabulary entry taken from a previously shared lesson."""

    word: str
    definition: str
    example: str | None = None
    part_of_speech: str | None = None


@dataclass
class ContinuityContext:
    """Continuity information for the next lesson of a learner.

    Attributes:
        previous_lesson_title: Title of the most recently shared lesson, if any.
        previous_vocabulary: Its vocabulary; empty when it should not be reused.
        lessons_since_last_shared: 0 for the immediately preceding lesson.
        should_reuse: Whether the vocabulary should be woven into the new dialogue.
    """

    previous_lesson_title: str | None = None
    previous_vocabulary: list[PreviousVocabulary] = field(default_factory=list)
    lessons_since_last_shared: int = 0
    should_reuse: bool = False

    @property
    def words(self) -> list[str]:
        return [item.word for item in self.previous_vocabulary]


@dataclass
class VocabularyHistoryEntry:
    lesson_title: str
    vocabulary: list[PreviousVocabulary]
    shared_at: datetime | None = None


def extract_vocabulary_from_lesson(content: Any) -> list[PreviousVocabulary]:
    """Extract vocabulary from the first vocabulary exercise of stored lesson content.

    Only items with a string word and a string definition are kept. Malformed
    content yields an empty list.
    """
    if not isinstance(content, dict):
        return []
    exercises = content.get("exercises")
    if not isinstance(exercises, list):
        return []

    vocab_exercise = next(
        (ex for ex in exercises if isinstance(ex, dict) and ex.get("type") == EXERCISE_VOCABULARY),
        None,
    )
    if vocab_exercise is None:
        return []
    exercise_content = vocab_exercise.get("content")
    items = exercise_content.get("vocabulary") if isinstance(exercise_content, dict) else None
    if not isinstance(items, list):
        return []

    return [
        PreviousVocabulary(
            word=item["word"],
            definition=item["definition"],
            example=item.get("example"),
            part_of_speech=item.get("partOfSpeech"),
        )
        for item in items
        if isinstance(item, dict)
        and isinstance(item.get("word"), str)
        and isinstance(item.get("definition"), str)
    ]


def merge_vocabulary(vocabularies: Iterable[list[PreviousVocabulary]]) -> list[PreviousVocabulary]:
    """Merge vocabulary lists, keeping the first occurrence of each word (case-insensitive)."""
    seen: set[str] = set()
    merged: list[PreviousVocabulary] = []
    for vocab_list in vocabularies:
        for item in vocab_list:
            key = item.word.lower()
            if key not in seen:
                seen.add(key)
                merged.append(item)
    return merged


class VocabularyContinuityTracker:
    """Reads prior shared lessons and decides vocabulary reuse.

    Args:
        store: Lesson store collaborator.
        lookback: How many recent shared lessons to consider.
        max_lessons_back: Reuse window; vocabulary older than this is not reused.
    """

    def __init__(
        self,
        store: LessonStore,
        lookback: int = CONTINUITY_LOOKBACK,
        max_lessons_back: int = CONTINUITY_MAX_LESSONS_BACK,
    ):
        self.store = store
        self.lookback = lookback
        self.max_lessons_back = max_lessons_back

    def get_continuity_context(self, learner_id: str) -> ContinuityContext:
        """Build the continuity context for the learner's next lesson.

        Never raises; store errors are logged and produce the empty context.
        """
        try:
            lessons = self.store.list_shared_lessons(learner_id, limit=self.lookback)
        except Exception as e:
            logger.error(f"Error getting vocabulary context for learner {learner_id}: {e}")
            return ContinuityContext()

        if not lessons:
            return ContinuityContext()

        most_recent = lessons[0]
        lessons_since = len(lessons) - 1
        should_reuse = lessons_since <= self.max_lessons_back
        vocabulary = extract_vocabulary_from_lesson(most_recent.content) if should_reuse else []

        logger.debug(
            f"Continuity for learner {learner_id}: '{most_recent.title}', "
            f"{lessons_since} lesson(s) back, reuse={should_reuse}, {len(vocabulary)} word(s)"
        )
        return ContinuityContext(
            previous_lesson_title=most_recent.title,
            previous_vocabulary=vocabulary,
            lessons_since_last_shared=lessons_since,
            should_reuse=should_reuse,
        )

    def get_vocabulary_history(self, learner_id: str) -> list[VocabularyHistoryEntry]:
        """Vocabulary of every shared lesson, newest first. Store errors yield []."""
        try:
            lessons = self.store.list_shared_lessons(learner_id)
        except Exception as e:
            logger.error(f"Error getting vocabulary history for learner {learner_id}: {e}")
            return []

        return [
            VocabularyHistoryEntry(
                lesson_title=lesson.title,
                vocabulary=extract_vocabulary_from_lesson(lesson.content),
                shared_at=lesson.shared_at,
            )
            for lesson in lessons
        ]
