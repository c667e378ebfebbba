"""Data model for learners, topics and generated lessons.

Wire format is the camelCase JSON the provider is asked to produce. Every type
offers ``from_dict`` (tolerant of missing keys; missing content becomes an empty
default, nothing is invented) and ``to_dict`` for the persistence and
rendering collaborators.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from lesson_forge.constants.levels import (
    EXERCISE_COMPREHENSION,
    EXERCISE_DIALOGUE,
    EXERCISE_DISCUSSION,
    EXERCISE_GRAMMAR,
    EXERCISE_ROLEPLAY,
    EXERCISE_VOCABULARY,
)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _text_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, (list, tuple)):
        items = []
        for v in value:
            # Vocabulary objects in a flat list keep only their headword
            if isinstance(v, dict):
                v = v.get("word")
            if v is None or (isinstance(v, str) and not v.strip()):
                continue
            items.append(str(v))
        return items
    return [str(value)]


def _int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


# =============================================================================
# Inputs
# =============================================================================


@dataclass(frozen=True)
class LearnerProfile:
    """Learner profile supplied by the caller for one request.

    Attributes:
        name: Learner name, also used as the learner's character in dialogues.
        target_language: Language being learned.
        native_language: Learner's first language.
        age_group: e.g. "child", "teen", "adult".
        level: CEFR tier code (A1..C2).
        goals: Free-text learning goals.
        occupation: Optional occupation, drives vocabulary exclusions and role hints.
        weaknesses: Optional known weak areas.
        interests: Optional interests.
    """

    name: str
    target_language: str
    native_language: str
    age_group: str
    level: str
    goals: str
    occupation: str | None = None
    weaknesses: str | None = None
    interests: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LearnerProfile:
        return cls(
            name=_text(data.get("name")),
            target_language=_text(data.get("targetLanguage", data.get("target_language"))),
            native_language=_text(data.get("nativeLanguage", data.get("native_language"))),
            age_group=_text(data.get("ageGroup", data.get("age_group"))),
            level=_text(data.get("level", data.get("proficiencyTier"))).upper(),
            goals=_text(data.get("goals", data.get("endGoals"))),
            occupation=data.get("occupation") or None,
            weaknesses=data.get("weaknesses") or None,
            interests=data.get("interests") or None,
        )


@dataclass(frozen=True)
class LearningTopic:
    """One topic of a learning plan; the seed for a single lesson."""

    lesson_number: int
    title: str
    objective: str
    vocabulary: list[str]
    context: str
    methodology: str = "CLT"
    skills: list[str] = field(default_factory=list)
    grammar_focus: str | None = None
    previous_vocabulary: list[str] = field(default_factory=list)
    reuse_previous_vocabulary: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LearningTopic:
        return cls(
            lesson_number=_int(data.get("lessonNumber", data.get("lesson_number")), 0),
            title=_text(data.get("title")),
            objective=_text(data.get("objective")),
            vocabulary=_text_list(data.get("vocabulary")),
            context=_text(data.get("context")),
            methodology=_text(data.get("methodology")) or "CLT",
            skills=_text_list(data.get("skills")),
            grammar_focus=data.get("grammarFocus", data.get("grammar_focus")) or None,
            previous_vocabulary=_text_list(data.get("previousVocabulary")),
            reuse_previous_vocabulary=bool(data.get("reusePreviousVocabulary", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "lessonNumber": self.lesson_number,
            "title": self.title,
            "objective": self.objective,
            "vocabulary": list(self.vocabulary),
            "skills": list(self.skills),
            "context": self.context,
            "methodology": self.methodology,
        }
        if self.grammar_focus:
            d["grammarFocus"] = self.grammar_focus
        if self.previous_vocabulary:
            d["previousVocabulary"] = list(self.previous_vocabulary)
            d["reusePreviousVocabulary"] = self.reuse_previous_vocabulary
        return d


@dataclass
class LearningPlan:
    """Ordered topics plus the methodology chosen for the learner."""

    selected_methodology: str
    methodology_reasoning: str
    topics: list[LearningTopic] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "selectedMethodology": self.selected_methodology,
            "methodologyReasoning": self.methodology_reasoning,
            "topics": [topic.to_dict() for topic in self.topics],
        }


# =============================================================================
# Exercise payloads
# =============================================================================


@dataclass
class VocabularyItem:
    """A single vocabulary entry.

    Attributes:
        word: Headword or phrase.
        part_of_speech: e.g. "Noun", "Verb".
        phonetics: IPA transcription, e.g. "/ˈfæməli/".
        definition: Learner-level definition.
        example: Example sentence.
        synonym: Optional synonym; blanked by the validator when too complex for the tier.
        expressions: Common collocations; empty at A1.
    """

    word: str
    part_of_speech: str = ""
    phonetics: str = ""
    definition: str = ""
    example: str = ""
    synonym: str = ""
    expressions: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | str) -> VocabularyItem:
        if isinstance(data, str):
            return cls(word=data)
        return cls(
            word=_text(data.get("word")),
            part_of_speech=_text(data.get("partOfSpeech", data.get("part_of_speech"))),
            phonetics=_text(data.get("phonetics", data.get("phonetic"))),
            definition=_text(data.get("definition")),
            example=_text(data.get("example")),
            synonym=_text(data.get("synonym")),
            expressions=_text_list(data.get("expressions")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "word": self.word,
            "partOfSpeech": self.part_of_speech,
            "phonetics": self.phonetics,
            "definition": self.definition,
            "example": self.example,
            "synonym": self.synonym,
            "expressions": list(self.expressions),
        }


@dataclass
class VocabularyContent:
    vocabulary: list[VocabularyItem] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: Any) -> VocabularyContent:
        # Either {"vocabulary": [...]} or a bare list of items / words
        items = raw.get("vocabulary", []) if isinstance(raw, dict) else raw
        if not isinstance(items, list):
            return cls()
        return cls(
            vocabulary=[
                VocabularyItem.from_dict(item) for item in items if isinstance(item, (dict, str))
            ]
        )

    def to_dict(self) -> dict[str, Any]:
        return {"vocabulary": [item.to_dict() for item in self.vocabulary]}


@dataclass
class PracticeItem:
    question: str
    answer: str = ""


@dataclass
class GrammarContent:
    focus: str
    explanation: str = ""
    examples: list[str] = field(default_factory=list)
    practice: list[PracticeItem] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: Any) -> GrammarContent:
        if not isinstance(raw, dict):
            return cls(focus="")
        practice = []
        for item in raw.get("practice") or []:
            if isinstance(item, dict):
                practice.append(
                    PracticeItem(
                        question=_text(item.get("question")), answer=_text(item.get("answer"))
                    )
                )
            elif isinstance(item, str):
                practice.append(PracticeItem(question=item))
        return cls(
            focus=_text(raw.get("focus")),
            explanation=_text(raw.get("explanation")),
            examples=_text_list(raw.get("examples")),
            practice=practice,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "focus": self.focus,
            "explanation": self.explanation,
            "examples": list(self.examples),
            "practice": [{"question": p.question, "answer": p.answer} for p in self.practice],
        }


@dataclass
class DialogueCharacter:
    name: str
    role: str = ""
    avatar: str = ""


@dataclass
class DialogueLine:
    """One utterance: the speaking character's name and what they say."""

    character: str
    text: str


@dataclass
class DialogueContent:
    context: str = ""
    characters: list[DialogueCharacter] = field(default_factory=list)
    dialogue: list[DialogueLine] = field(default_factory=list)
    instructions: str = ""

    @classmethod
    def from_raw(cls, raw: Any) -> DialogueContent:
        if isinstance(raw, list):
            raw = {"dialogue": raw}
        if not isinstance(raw, dict):
            return cls()
        characters = [
            DialogueCharacter(
                name=_text(c.get("name")), role=_text(c.get("role")), avatar=_text(c.get("avatar"))
            )
            for c in raw.get("characters") or []
            if isinstance(c, dict)
        ]
        lines = [
            DialogueLine(
                character=_text(line.get("character", line.get("speaker"))),
                text=_text(line.get("text", line.get("line"))),
            )
            for line in raw.get("dialogue") or []
            if isinstance(line, dict)
        ]
        return cls(
            context=_text(raw.get("context", raw.get("setting"))),
            characters=characters,
            dialogue=lines,
            instructions=_text(raw.get("instructions")),
        )

    @property
    def speakers(self) -> list[str]:
        return [line.character for line in self.dialogue]

    def to_dict(self) -> dict[str, Any]:
        return {
            "context": self.context,
            "characters": [
                {"name": c.name, "role": c.role, **({"avatar": c.avatar} if c.avatar else {})}
                for c in self.characters
            ],
            "dialogue": [{"character": d.character, "text": d.text} for d in self.dialogue],
            "instructions": self.instructions,
        }


@dataclass
class DiscussionContent:
    questions: list[str] = field(default_factory=list)
    instructions: str = ""

    @classmethod
    def from_raw(cls, raw: Any) -> DiscussionContent:
        if isinstance(raw, list):
            return cls(questions=_text_list(raw))
        if not isinstance(raw, dict):
            return cls()
        return cls(
            questions=_text_list(raw.get("questions")),
            instructions=_text(raw.get("instructions")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"questions": list(self.questions), "instructions": self.instructions}


@dataclass
class ComprehensionQuestion:
    question: str
    type: str = "short-answer"  # multiple-choice | true-false | short-answer
    options: list[str] = field(default_factory=list)
    answer: str = ""


@dataclass
class ComprehensionContent:
    questions: list[ComprehensionQuestion] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: Any) -> ComprehensionContent:
        items = raw.get("questions", []) if isinstance(raw, dict) else raw
        questions = []
        for item in items if isinstance(items, list) else []:
            if isinstance(item, str):
                questions.append(ComprehensionQuestion(question=item))
            elif isinstance(item, dict):
                questions.append(
                    ComprehensionQuestion(
                        question=_text(item.get("question")),
                        type=_text(item.get("type")) or "short-answer",
                        options=_text_list(item.get("options")),
                        answer=_text(item.get("answer")),
                    )
                )
        return cls(questions=questions)

    def to_dict(self) -> dict[str, Any]:
        return {
            "questions": [
                {"question": q.question, "type": q.type, "options": list(q.options), "answer": q.answer}
                for q in self.questions
            ]
        }


@dataclass
class RoleplayRole:
    name: str
    description: str = ""
    key_points: list[str] = field(default_factory=list)


@dataclass
class RoleplayContent:
    scenario: str = ""
    roles: list[RoleplayRole] = field(default_factory=list)
    instructions: str = ""

    @classmethod
    def from_raw(cls, raw: Any) -> RoleplayContent:
        if not isinstance(raw, dict):
            return cls(scenario=_text(raw) if isinstance(raw, str) else "")
        roles = [
            RoleplayRole(
                name=_text(r.get("name")),
                description=_text(r.get("description")),
                key_points=_text_list(r.get("keyPoints")),
            )
            for r in raw.get("roles") or []
            if isinstance(r, dict)
        ]
        return cls(
            scenario=_text(raw.get("scenario")),
            roles=roles,
            instructions=_text(raw.get("instructions")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "scenario": self.scenario,
            "roles": [
                {"name": r.name, "description": r.description, "keyPoints": list(r.key_points)}
                for r in self.roles
            ],
            "instructions": self.instructions,
        }


# Exercise type -> typed payload. Other types keep the decoded payload as-is.
CONTENT_TYPES: dict[str, type] = {
    EXERCISE_VOCABULARY: VocabularyContent,
    EXERCISE_GRAMMAR: GrammarContent,
    EXERCISE_DIALOGUE: DialogueContent,
    EXERCISE_DISCUSSION: DiscussionContent,
    EXERCISE_COMPREHENSION: ComprehensionContent,
    EXERCISE_ROLEPLAY: RoleplayContent,
}


# =============================================================================
# Exercise / lesson
# =============================================================================


@dataclass
class Exercise:
    """One exercise of a lesson, discriminated by ``type``.

    ``content`` is one of the typed payloads in CONTENT_TYPES for known types,
    otherwise the raw decoded payload (str, list or dict).
    """

    type: str
    title: str
    description: str = ""
    content: Any = None
    time_minutes: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Exercise:
        exercise_type = _text(data.get("type")).strip().lower()
        raw_content = data.get("content")
        content_cls = CONTENT_TYPES.get(exercise_type)
        if content_cls is not None and isinstance(raw_content, (dict, list)):
            content = content_cls.from_raw(raw_content)
        else:
            content = raw_content
        return cls(
            type=exercise_type,
            title=_text(data.get("title")),
            description=_text(data.get("description")),
            content=content,
            time_minutes=_int(data.get("timeMinutes", data.get("time_minutes")), 0),
        )

    def to_dict(self) -> dict[str, Any]:
        content = self.content.to_dict() if hasattr(self.content, "to_dict") else self.content
        return {
            "type": self.type,
            "title": self.title,
            "description": self.description,
            "content": content,
            "timeMinutes": self.time_minutes,
        }


@dataclass
class GeneratedLesson:
    """A complete lesson ready for persistence and rendering.

    Attributes:
        title: Lesson title.
        lesson_type: business | grammar | article | conversation | mixed.
        difficulty: 1-8 scale; template lessons use the tier rank (A1=1 ... C2=6).
        duration: Session length in minutes.
        objective: What the learner will achieve.
        skills: Practiced skills.
        vocabulary: Flat list of target words.
        context: Real-world scenario.
        exercises: Ordered exercises.
        homework: Optional homework.
        materials: Suggested materials.
        teaching_notes: Optional notes for the tutor.
    """

    title: str
    lesson_type: str
    difficulty: int
    duration: int
    objective: str
    skills: list[str] = field(default_factory=list)
    vocabulary: list[str] = field(default_factory=list)
    context: str = ""
    exercises: list[Exercise] = field(default_factory=list)
    homework: str | None = None
    materials: list[str] = field(default_factory=list)
    teaching_notes: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GeneratedLesson:
        exercises = [
            Exercise.from_dict(ex) for ex in data.get("exercises") or [] if isinstance(ex, dict)
        ]
        return cls(
            title=_text(data.get("title")),
            lesson_type=_text(data.get("lessonType", data.get("lesson_type"))) or "mixed",
            difficulty=_int(data.get("difficulty"), 0),
            duration=_int(data.get("duration"), 0),
            objective=_text(data.get("objective")),
            skills=_text_list(data.get("skills")),
            vocabulary=_text_list(data.get("vocabulary")),
            context=_text(data.get("context")),
            exercises=exercises,
            homework=data.get("homework") or None,
            materials=_text_list(data.get("materials")),
            teaching_notes=data.get("teachingNotes", data.get("teaching_notes")) or None,
        )

    def exercises_of_type(self, exercise_type: str) -> list[Exercise]:
        return [ex for ex in self.exercises if ex.type == exercise_type]

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "title": self.title,
            "lessonType": self.lesson_type,
            "difficulty": self.difficulty,
            "duration": self.duration,
            "objective": self.objective,
            "skills": list(self.skills),
            "vocabulary": list(self.vocabulary),
            "context": self.context,
            "exercises": [ex.to_dict() for ex in self.exercises],
            "materials": list(self.materials),
        }
        if self.homework:
            d["homework"] = self.homework
        if self.teaching_notes:
            d["teachingNotes"] = self.teaching_notes
        return d


# =============================================================================
# Grammar lesson
# =============================================================================


@dataclass
class GrammarExplanation:
    definition: str = ""
    usage: str = ""
    examples: list[str] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: Any) -> GrammarExplanation:
        if isinstance(raw, str):
            return cls(definition=raw)
        if not isinstance(raw, dict):
            return cls()
        return cls(
            definition=_text(raw.get("definition")),
            usage=_text(raw.get("usage")),
            examples=_text_list(raw.get("examples")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"definition": self.definition, "usage": self.usage, "examples": list(self.examples)}


@dataclass
class GrammarExercise:
    """One grammar lesson exercise.

    ``content`` keeps the decoded payload; its keys depend on ``type``
    (``sentences`` for sentence-practice and fill-blanks, ``questions`` for
    multiple-choice, ``exercises`` for sentence-building, ...).
    """

    type: str
    title: str
    content: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GrammarExercise:
        content = data.get("content")
        return cls(
            type=_text(data.get("type")).strip().lower(),
            title=_text(data.get("title")),
            content=content if isinstance(content, dict) else {},
        )

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "title": self.title, "content": self.content}


@dataclass
class GrammarLesson:
    """A grammar-focused lesson: rule explanation followed by practice exercises.

    Attributes:
        title: Lesson title.
        grammar_topic: The grammar point taught, e.g. "Present Perfect".
        context: Real-world context where the grammar is used.
        explanation: Definition, usage and examples of the rule.
        exercises: Exercises in lesson order (see GRAMMAR_EXERCISE_TYPES).
    """

    title: str
    grammar_topic: str
    context: str = ""
    explanation: GrammarExplanation = field(default_factory=GrammarExplanation)
    exercises: list[GrammarExercise] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GrammarLesson:
        return cls(
            title=_text(data.get("title")),
            grammar_topic=_text(data.get("grammarTopic", data.get("grammar_topic"))),
            context=_text(data.get("context")),
            explanation=GrammarExplanation.from_raw(data.get("explanation")),
            exercises=[
                GrammarExercise.from_dict(ex)
                for ex in data.get("exercises") or []
                if isinstance(ex, dict)
            ],
        )

    def exercises_of_type(self, exercise_type: str) -> list[GrammarExercise]:
        return [ex for ex in self.exercises if ex.type == exercise_type]

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "grammarTopic": self.grammar_topic,
            "context": self.context,
            "explanation": self.explanation.to_dict(),
            "exercises": [ex.to_dict() for ex in self.exercises],
        }
