"""Tests for lesson data model parsing and serialization."""

from lesson_forge.models import (
    ComprehensionContent,
    DialogueContent,
    DiscussionContent,
    Exercise,
    GeneratedLesson,
    GrammarContent,
    GrammarExercise,
    GrammarExplanation,
    GrammarLesson,
    LearnerProfile,
    LearningPlan,
    LearningTopic,
    RoleplayContent,
    VocabularyContent,
    VocabularyItem,
)


class TestLearnerProfile:
    def test_from_camel_case_dict(self):
        profile = LearnerProfile.from_dict(
            {
                "name": "Ana",
                "targetLanguage": "English",
                "nativeLanguage": "Portuguese",
                "ageGroup": "adult",
                "level": "b1",
                "goals": "Travel",
                "occupation": "",
            }
        )
        assert profile.level == "B1"
        assert profile.native_language == "Portuguese"
        assert profile.occupation is None


class TestLearningTopic:
    def test_from_dict_defaults(self):
        topic = LearningTopic.from_dict({"title": "Shopping", "vocabulary": "price"})
        assert topic.title == "Shopping"
        assert topic.vocabulary == ["price"]
        assert topic.methodology == "CLT"
        assert topic.lesson_number == 0
        assert topic.reuse_previous_vocabulary is False

    def test_to_dict_includes_previous_vocabulary_only_when_set(self, family_topic):
        assert "previousVocabulary" not in family_topic.to_dict()

        topic = LearningTopic.from_dict(
            {**family_topic.to_dict(), "previousVocabulary": ["hello"], "reusePreviousVocabulary": True}
        )
        d = topic.to_dict()
        assert d["previousVocabulary"] == ["hello"]
        assert d["reusePreviousVocabulary"] is True


class TestLearningPlan:
    def test_to_dict(self, family_topic):
        plan = LearningPlan("CLT", "because", [family_topic])
        d = plan.to_dict()
        assert d["selectedMethodology"] == "CLT"
        assert d["topics"][0]["title"] == "Meeting New People"


class TestExerciseContent:
    """Typed payloads are picked by exercise type."""

    def test_vocabulary_payload(self):
        exercise = Exercise.from_dict(
            {
                "type": "Vocabulary",
                "title": "Words",
                "content": {"vocabulary": [{"word": "cat", "partOfSpeech": "Noun"}, "dog"]},
                "timeMinutes": "8",
            }
        )
        assert exercise.type == "vocabulary"
        assert exercise.time_minutes == 8
        assert isinstance(exercise.content, VocabularyContent)
        assert [item.word for item in exercise.content.vocabulary] == ["cat", "dog"]
        assert exercise.content.vocabulary[0].part_of_speech == "Noun"

    def test_dialogue_accepts_bare_line_list(self):
        exercise = Exercise.from_dict(
            {
                "type": "dialogue",
                "title": "Talk",
                "content": [{"speaker": "Ana", "line": "Hi"}, {"character": "Bo", "text": "Hey"}],
            }
        )
        assert isinstance(exercise.content, DialogueContent)
        assert exercise.content.speakers == ["Ana", "Bo"]

    def test_grammar_practice_strings_and_dicts(self):
        content = GrammarContent.from_raw(
            {"focus": "Past", "practice": ["I ___ (go).", {"question": "She ___.", "answer": "went"}]}
        )
        assert content.practice[0].answer == ""
        assert content.practice[1].answer == "went"

    def test_discussion_from_list(self):
        assert DiscussionContent.from_raw(["Why?", "How?"]).questions == ["Why?", "How?"]

    def test_comprehension_and_roleplay(self):
        comprehension = ComprehensionContent.from_raw(
            {"questions": ["Who?", {"question": "True?", "type": "true-false", "answer": "true"}]}
        )
        assert comprehension.questions[0].type == "short-answer"
        assert comprehension.questions[1].type == "true-false"

        roleplay = RoleplayContent.from_raw(
            {"scenario": "Job interview", "roles": [{"name": "Candidate", "keyPoints": ["salary"]}]}
        )
        assert roleplay.roles[0].key_points == ["salary"]

    def test_unknown_type_keeps_raw_content(self):
        exercise = Exercise.from_dict({"type": "warmup", "title": "Warm up", "content": "Chat freely"})
        assert exercise.content == "Chat freely"
        assert exercise.to_dict()["content"] == "Chat freely"


class TestGeneratedLesson:
    def test_from_dict(self, lesson_payload):
        lesson = GeneratedLesson.from_dict(lesson_payload)
        assert lesson.title == "Meeting New People"
        assert lesson.lesson_type == "conversation"
        assert [ex.type for ex in lesson.exercises] == ["vocabulary", "dialogue", "discussion"]
        assert lesson.homework is None

    def test_missing_fields_default_empty(self):
        lesson = GeneratedLesson.from_dict({})
        assert lesson.title == ""
        assert lesson.lesson_type == "mixed"
        assert lesson.exercises == []
        assert lesson.difficulty == 0

    def test_to_dict_roundtrip_keys(self, lesson_payload):
        d = GeneratedLesson.from_dict(lesson_payload).to_dict()
        vocab = d["exercises"][0]["content"]["vocabulary"][0]
        assert vocab["partOfSpeech"] == "Interjection"
        assert d["exercises"][1]["content"]["dialogue"][0] == {
            "character": "Maria",
            "text": "Hello! I am Maria.",
        }
        assert "homework" not in d

    def test_exercises_of_type(self, lesson_payload):
        lesson = GeneratedLesson.from_dict(lesson_payload)
        assert len(lesson.exercises_of_type("dialogue")) == 1
        assert lesson.exercises_of_type("grammar") == []

    def test_vocabulary_objects_keep_headword(self):
        lesson = GeneratedLesson.from_dict(
            {"vocabulary": [{"word": "hello"}, {"definition": "no headword"}, "family", "  "]}
        )
        assert lesson.vocabulary == ["hello", "family"]


class TestVocabularyItem:
    def test_from_string(self):
        assert VocabularyItem.from_dict("tree") == VocabularyItem(word="tree")


class TestGrammarLesson:
    def test_from_dict(self):
        lesson = GrammarLesson.from_dict(
            {
                "title": "Your Week",
                "grammarTopic": "Past Simple",
                "explanation": {"definition": "Finished actions.", "examples": ["I walked."]},
                "exercises": [
                    {"type": " Fill-Blanks ", "title": "Fill", "content": {"sentences": ["I ___."]}},
                    {"type": "multiple-choice", "title": "Choose", "content": "bad"},
                    "not an exercise",
                ],
            }
        )
        assert lesson.grammar_topic == "Past Simple"
        assert lesson.explanation.examples == ["I walked."]
        assert [ex.type for ex in lesson.exercises] == ["fill-blanks", "multiple-choice"]
        assert lesson.exercises[1].content == {}
        assert lesson.exercises_of_type("fill-blanks")[0].title == "Fill"

    def test_snake_case_topic_and_string_explanation(self):
        lesson = GrammarLesson.from_dict({"grammar_topic": "Articles", "explanation": "Use a/an."})
        assert lesson.grammar_topic == "Articles"
        assert lesson.explanation == GrammarExplanation(definition="Use a/an.")
        assert lesson.exercises == []

    def test_to_dict_keys(self):
        lesson = GrammarLesson(
            title="T",
            grammar_topic="Articles",
            exercises=[GrammarExercise(type="grammar-focus", title="Focus", content={"rule": "a/an"})],
        )
        d = lesson.to_dict()
        assert d["grammarTopic"] == "Articles"
        assert d["explanation"] == {"definition": "", "usage": "", "examples": []}
        assert d["exercises"] == [{"type": "grammar-focus", "title": "Focus", "content": {"rule": "a/an"}}]
