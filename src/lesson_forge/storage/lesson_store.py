"""Read interface to the external lesson store.

Persistence is owned by the host application; the pipeline only needs the
lessons that have been shared with a learner, newest first.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass
class SharedLesson:
    """A stored lesson that has been shared with (taught to) a learner.

    Attributes:
        lesson_id: Store identifier.
        title: Lesson title.
        content: Lesson content as persisted (the camelCase lesson dict).
        shared_at: When the lesson was shared.
    """

    lesson_id: str
    title: str
    content: dict[str, Any] = field(default_factory=dict)
    shared_at: datetime | None = None


class LessonStore(ABC):
    """Abstract read access to a learner's shared lessons.

    **Core Methods (Required):**
        - `list_shared_lessons(learner_id, limit)`: shared lessons, newest first
    """

    @abstractmethod
    def list_shared_lessons(self, learner_id: str, limit: int | None = None) -> list[SharedLesson]:
        """Return lessons shared with the learner, ordered by share time, newest first.

        Args:
            learner_id: Learner identifier.
            limit: Maximum number of lessons to return; None for all.

        Raises:
            Exception: Any backend error; callers decide how to absorb it.
        """
        pass


class InMemoryLessonStore(LessonStore):
    """Dict-backed store for local runs and tests."""

    def __init__(self) -> None:
        self._lessons: dict[str, list[SharedLesson]] = {}

    def add_shared_lesson(
        self,
        learner_id: str,
        lesson_id: str,
        title: str,
        content: dict[str, Any],
        shared_at: datetime | None = None,
    ) -> SharedLesson:
        """Record a lesson as shared with the learner (now, unless shared_at is given)."""
        lesson = SharedLesson(
            lesson_id=lesson_id,
            title=title,
            content=content,
            shared_at=shared_at or datetime.now(timezone.utc),
        )
        self._lessons.setdefault(learner_id, []).append(lesson)
        return lesson

    def list_shared_lessons(self, learner_id: str, limit: int | None = None) -> list[SharedLesson]:
        lessons = sorted(
            self._lessons.get(learner_id, []),
            key=lambda lesson: lesson.shared_at or datetime.min.replace(tzinfo=timezone.utc),
            reverse=True,
        )
        return lessons if limit is None else lessons[:limit]
