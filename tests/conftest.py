"""Shared fixtures: scripted providers, learner profiles, topics, lesson payloads."""

import json

import pytest

from lesson_forge.llm.base import LLMProvider, LLMResponse
from lesson_forge.models import LearnerProfile, LearningTopic


class ScriptedProvider(LLMProvider):
    """Provider that returns (or raises) pre-set outcomes in order."""

    def __init__(self, model: str, *outcomes):
        self.model = model
        self.outcomes = list(outcomes)
        self.calls: list[tuple[str, dict]] = []

    def complete(self, prompt: str, **kwargs) -> LLMResponse:
        self.calls.append((prompt, kwargs))
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return LLMResponse(content=outcome, model=self.model, input_tokens=10, output_tokens=5)


@pytest.fixture
def make_provider():
    """Factory: make_provider("model", "text" | Exception, ...)."""
    return ScriptedProvider


@pytest.fixture
def a1_profile():
    return LearnerProfile(
        name="Maria",
        target_language="English",
        native_language="Spanish",
        age_group="adult",
        level="A1",
        goals="Everyday conversation",
    )


@pytest.fixture
def b2_profile():
    return LearnerProfile(
        name="Kenji",
        target_language="English",
        native_language="Japanese",
        age_group="adult",
        level="B2",
        goals="Business meetings",
        occupation="Software developer",
        weaknesses="articles",
    )


@pytest.fixture
def family_topic():
    return LearningTopic(
        lesson_number=1,
        title="Meeting New People",
        objective="Greet people and talk about family",
        vocabulary=["hello", "family"],
        context="A neighbourhood party",
        skills=["speaking", "listening"],
    )


@pytest.fixture
def lesson_payload():
    """Well-formed provider lesson for the A1 learner "Maria"."""
    return {
        "title": "Meeting New People",
        "lessonType": "conversation",
        "difficulty": 1,
        "duration": 50,
        "objective": "Greet people and talk about family",
        "skills": ["speaking", "listening"],
        "vocabulary": ["hello", "family"],
        "context": "A neighbourhood party",
        "exercises": [
            {
                "type": "vocabulary",
                "title": "Exercise 1: Vocabulary",
                "description": "Key words",
                "content": {
                    "vocabulary": [
                        {
                            "word": "hello",
                            "partOfSpeech": "Interjection",
                            "phonetics": "/həˈləʊ/",
                            "definition": "A word you say when you meet someone.",
                            "example": "Hello, I am Maria.",
                            "synonym": "salutation",
                            "expressions": ["say hello"],
                        },
                        {
                            "word": "family",
                            "partOfSpeech": "Noun",
                            "phonetics": "/ˈfæməli/",
                            "definition": "Your mother, father, brothers and sisters.",
                            "example": "My family is big.",
                            "synonym": "kin",
                            "expressions": [],
                        },
                    ]
                },
                "timeMinutes": 10,
            },
            {
                "type": "dialogue",
                "title": "Exercise 2: Dialogue",
                "description": "Practice",
                "content": {
                    "context": "At the party",
                    "characters": [
                        {"name": "Maria", "role": "Guest"},
                        {"name": "Tom", "role": "Host"},
                    ],
                    "dialogue": [
                        {"character": "Maria", "text": "Hello! I am Maria."},
                        {"character": "Tom", "text": "Hello Maria! Is this your family?"},
                        {"character": "Maria", "text": "Yes, this is my family."},
                    ],
                    "instructions": "Read with a partner.",
                },
                "timeMinutes": 20,
            },
            {
                "type": "discussion",
                "title": "Exercise 3: Discussion",
                "description": "Talk",
                "content": {"questions": ["Is your family big?"]},
                "timeMinutes": 20,
            },
        ],
        "materials": [],
    }


@pytest.fixture
def lesson_json(lesson_payload):
    return json.dumps(lesson_payload, ensure_ascii=False)
