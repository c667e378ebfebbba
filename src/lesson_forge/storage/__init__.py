"""Lesson store interface."""

from lesson_forge.storage.lesson_store import InMemoryLessonStore, LessonStore, SharedLesson

__all__ = ["LessonStore", "SharedLesson", "InMemoryLessonStore"]
