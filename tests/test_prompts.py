"""Tests for prompt builders."""

import json

from lesson_forge.constants.levels import GRAMMAR_EXERCISE_TYPES
from lesson_forge.continuity import ContinuityContext, PreviousVocabulary
from lesson_forge.levels import A1Policy
from lesson_forge.prompts import (
    GRAMMAR_LEVEL_SCALING,
    LESSON_OUTPUT_FORMAT,
    LESSON_SYSTEM_PROMPT,
    build_grammar_lesson_prompt,
    build_instant_lesson_prompt,
    build_learning_plan_prompt,
    build_lesson_prompt,
    get_occupation_exclusions,
    get_occupation_role_hint,
    instant_lesson_minutes,
)


class TestOccupationData:
    def test_exclusions_merge_matching_keywords(self):
        terms = get_occupation_exclusions("Senior Software Developer")
        assert terms[:3] == ["computer", "code", "program"]
        assert len(terms) == len(set(terms))

    def test_no_occupation(self):
        assert get_occupation_exclusions(None) == []
        assert get_occupation_role_hint("") is None

    def test_unknown_occupation(self):
        assert get_occupation_exclusions("Astronaut") == []

    def test_role_hint(self):
        assert "shift handovers" in get_occupation_role_hint("ICU Nurse")


class TestBuildLessonPrompt:
    def test_contains_profile_topic_and_guide(self, a1_profile, family_topic):
        prompt = build_lesson_prompt(a1_profile, family_topic, 50, A1Policy().get_vocabulary_guide())

        assert prompt.startswith(LESSON_SYSTEM_PROMPT)
        assert prompt.endswith(LESSON_OUTPUT_FORMAT)
        assert "- Name: Maria" in prompt
        assert "REQUIRED VOCABULARY (must all be used): hello, family" in prompt
        assert "A1/BEGINNER VOCABULARY" in prompt
        assert "must add up to 50" in prompt
        assert "No occupation-specific exclusions" in prompt
        assert "no previous vocabulary to reuse" in prompt

    def test_occupation_exclusions_and_scenarios(self, b2_profile, family_topic):
        prompt = build_lesson_prompt(b2_profile, family_topic, 25, "guide")
        assert "Do NOT teach these basic Software developer terms" in prompt
        assert "code reviews, sprint planning" in prompt

    def test_continuity_section(self, a1_profile, family_topic):
        continuity = ContinuityContext(
            previous_lesson_title="Greetings",
            previous_vocabulary=[PreviousVocabulary("goodbye", "a word for leaving")],
            should_reuse=True,
        )
        prompt = build_lesson_prompt(a1_profile, family_topic, 50, "guide", continuity)
        assert '- Previous lesson: "Greetings"' in prompt
        assert "previously taught words in the dialogue: goodbye" in prompt

    def test_continuity_not_reused(self, a1_profile, family_topic):
        continuity = ContinuityContext(
            previous_lesson_title="Old",
            previous_vocabulary=[PreviousVocabulary("goodbye", "x")],
            should_reuse=False,
        )
        prompt = build_lesson_prompt(a1_profile, family_topic, 50, "guide", continuity)
        assert "goodbye" not in prompt.split("## Output format")[0].split("## Vocabulary continuity")[1]


class TestBuildLearningPlanPrompt:
    def test_plan_prompt(self, b2_profile):
        prompt = build_learning_plan_prompt(b2_profile, "TBLT", "Because work.")
        assert prompt.startswith("Generate a 10-lesson learning plan for a B2 English student.")
        assert "SELECTED METHODOLOGY: TBLT" in prompt
        assert "meaningful tasks" in prompt

        example = json.loads(prompt[prompt.index("{") :])
        assert example["topics"][0]["methodology"] == "TBLT"


class TestBuildGrammarLessonPrompt:
    def test_topic_profile_and_scaling(self, b2_profile):
        prompt = build_grammar_lesson_prompt(b2_profile, "Present Perfect")
        assert prompt.startswith(
            "You are an expert ESL grammar teacher. Generate a grammar lesson for a B2 student"
        )
        assert "## Grammar topic\n\nPresent Perfect" in prompt
        assert "- Occupation: Software developer" in prompt
        assert "Kenji speaks first" in prompt
        assert GRAMMAR_LEVEL_SCALING["B2"] in prompt

    def test_every_tier_has_scaling(self):
        assert set(GRAMMAR_LEVEL_SCALING) == {"A1", "A2", "B1", "B2", "C1", "C2"}

    def test_lists_all_exercise_types(self, a1_profile):
        prompt = build_grammar_lesson_prompt(a1_profile, "Past Simple")
        for exercise_type in GRAMMAR_EXERCISE_TYPES:
            assert exercise_type in prompt


class TestBuildInstantLessonPrompt:
    def test_minutes(self):
        assert instant_lesson_minutes(50) == {
            "vocabulary": 8,
            "preparation": 7,
            "dialogue": 25,
            "finalprep": 15,
        }

    def _example(self, prompt):
        return json.loads(prompt[prompt.index("## Output format (JSON only)") :].split("\n\n", 1)[1])

    def test_request_and_example(self, b2_profile):
        prompt = build_instant_lesson_prompt(b2_profile, "Job interview tomorrow", "speaking", 50, "GUIDE")
        assert '- Situation: "Job interview tomorrow"' in prompt
        assert "- Primary focus: speaking" in prompt
        assert "GUIDE" in prompt
        assert "Do NOT teach these basic Software developer terms" in prompt

        example = self._example(prompt)
        assert example["lessonType"] == "instant"
        assert example["skills"] == ["speaking"]
        assert [ex["timeMinutes"] for ex in example["exercises"]] == [8, 7, 25, 15]
        assert example["exercises"][2]["content"]["dialogue"][0]["character"] == "Kenji"

    def test_mixed_focus_skills(self, a1_profile):
        prompt = build_instant_lesson_prompt(a1_profile, "Party", "mixed", 50, "GUIDE")
        assert self._example(prompt)["skills"] == ["Speaking", "Listening", "Vocabulary"]
