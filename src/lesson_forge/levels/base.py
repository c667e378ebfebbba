"""Base class for CEFR tier policies.

A LevelPolicy bundles everything that varies by tier: the deterministic
template lesson, the curated seed vocabulary, the vocabulary guide used in the
generation prompt, and the accept-set used for offline vocabulary audits.

Subclasses only supply tier data (class attributes plus three data methods);
all behavior lives here. Policies hold no per-request state, so one instance
can be shared across concurrent requests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from lesson_forge.constants.levels import (
    DEFAULT_LEARNER_NAME,
    EXERCISE_DIALOGUE,
    EXERCISE_DISCUSSION,
    EXERCISE_GRAMMAR,
    EXERCISE_VOCABULARY,
)
from lesson_forge.models import (
    DialogueCharacter,
    DialogueContent,
    DialogueLine,
    DiscussionContent,
    Exercise,
    GeneratedLesson,
    GrammarContent,
    LearnerProfile,
    LearningTopic,
    PracticeItem,
    VocabularyContent,
    VocabularyItem,
)

# Placeholder for the learner's name in template dialogue lines
LEARNER = "{learner}"


class LevelPolicy(ABC):
    """Tier strategy for one CEFR level.

    Class attributes (set by each tier):
        level: CEFR code, e.g. "B1".
        rank: Fixed difficulty rank (A1=1 ... C2=6).
        grammar_focus: Default grammar focus when the topic has none.
        grammar_explanation / grammar_examples / grammar_practice: Template grammar block.
        partner_name / default_role: The non-learner character and the learner's fallback role.
        dialogue_lines: (speaker, text) pairs; LEARNER marks the learner's lines.
        discussion_questions: Template discussion questions.
        minutes: Minutes for the vocabulary, grammar, dialogue and discussion exercises.
        denylist: Basic terms rejected outright (upper tiers only).
    """

    level: str = ""
    rank: int = 0
    grammar_focus: str = ""
    grammar_explanation: str = ""
    grammar_examples: tuple[str, ...] = ()
    grammar_practice: tuple[tuple[str, str], ...] = ()
    vocabulary_description: str = "Practice vocabulary for '{title}'."
    dialogue_description: str = "Practice a conversation using target vocabulary."
    dialogue_instructions: str = "Read and practice."
    partner_name: str = "Teacher"
    default_role: str = "Learner"
    dialogue_lines: tuple[tuple[str, str], ...] = ()
    discussion_description: str = "Answer questions about the dialogue."
    discussion_questions: tuple[str, ...] = ()
    minutes: tuple[int, int, int, int] = (8, 10, 10, 7)
    denylist: frozenset[str] = frozenset()

    # =========================================================================
    # Tier data
    # =========================================================================

    @abstractmethod
    def generate_vocabulary_items(self) -> list[VocabularyItem]:
        """Curated seed vocabulary for the tier (fallback, not provider output)."""
        pass

    @abstractmethod
    def get_vocabulary_guide(self) -> str:
        """Prompt configuration text describing the tier's vocabulary register."""
        pass

    @abstractmethod
    def get_acceptable_vocabulary(self) -> frozenset[str]:
        """Lowercase words and phrases considered on-tier."""
        pass

    # =========================================================================
    # Vocabulary checks
    # =========================================================================

    def is_word_acceptable_for_level(self, word: str) -> bool:
        """Check whether a word or phrase fits this tier.

        The denylist (C1/C2 only) is checked first. Otherwise the word must
        match the accept-set, allowing substring matches in either direction
        so inflected forms ("families" vs "family") still match.
        """
        candidate = word.strip().lower()
        if not candidate:
            return False
        if candidate in self.denylist:
            return False
        for accepted in self.get_acceptable_vocabulary():
            if candidate == accepted or accepted in candidate or candidate in accepted:
                return True
        return False

    def get_vocabulary_for_level(self, words: list[str]) -> list[str]:
        """Return the words to teach at this tier.

        Currently a passthrough for every tier; no filtering rule is applied.
        """
        return list(words)

    # =========================================================================
    # Template lesson
    # =========================================================================

    def generate_lesson(
        self, profile: LearnerProfile, topic: LearningTopic, duration: int
    ) -> GeneratedLesson:
        """Assemble the deterministic four-exercise lesson for this tier.

        Args:
            profile: Learner profile; its name becomes the learner's dialogue character.
            topic: Topic supplying title, objective, context and seed vocabulary.
            duration: Session length in minutes.

        Returns:
            GeneratedLesson with difficulty equal to the tier rank.
        """
        vocabulary = self.get_vocabulary_for_level(topic.vocabulary)
        grammar_focus = topic.grammar_focus or self.grammar_focus
        learner = profile.name or DEFAULT_LEARNER_NAME
        vocab_minutes, grammar_minutes, dialogue_minutes, discussion_minutes = self.minutes

        exercises = [
            Exercise(
                type=EXERCISE_VOCABULARY,
                title=f"{self.level} Vocabulary Practice",
                description=self.vocabulary_description.format(title=topic.title),
                content=self._vocabulary_content(vocabulary),
                time_minutes=vocab_minutes,
            ),
            Exercise(
                type=EXERCISE_GRAMMAR,
                title="Grammar Focus",
                description=f"Learn and practice: {grammar_focus}.",
                content=GrammarContent(
                    focus=grammar_focus,
                    explanation=self.grammar_explanation,
                    examples=list(self.grammar_examples),
                    practice=[PracticeItem(question=q, answer=a) for q, a in self.grammar_practice],
                ),
                time_minutes=grammar_minutes,
            ),
            Exercise(
                type=EXERCISE_DIALOGUE,
                title=f"{self.level} Dialogue",
                description=self.dialogue_description,
                content=self._dialogue_content(learner, profile.occupation, topic.context),
                time_minutes=dialogue_minutes,
            ),
            Exercise(
                type=EXERCISE_DISCUSSION,
                title="Discussion Questions",
                description=self.discussion_description,
                content=DiscussionContent(questions=list(self.discussion_questions)),
                time_minutes=discussion_minutes,
            ),
        ]

        return GeneratedLesson(
            title=topic.title,
            lesson_type="conversation",
            difficulty=self.rank,
            duration=duration,
            objective=topic.objective,
            skills=list(topic.skills),
            vocabulary=vocabulary,
            context=topic.context,
            exercises=exercises,
            materials=[],
        )

    def _vocabulary_content(self, words: list[str]) -> VocabularyContent:
        # Seed entries carry definitions; other words stay bare
        seeds = {item.word.lower(): item for item in self.generate_vocabulary_items()}
        items = [seeds.get(word.lower()) or VocabularyItem(word=word) for word in words]
        return VocabularyContent(vocabulary=items)

    def _dialogue_content(
        self, learner: str, occupation: str | None, context: str
    ) -> DialogueContent:
        lines = [
            DialogueLine(character=learner if speaker == LEARNER else speaker, text=text)
            for speaker, text in self.dialogue_lines
        ]
        return DialogueContent(
            context=context,
            characters=[
                DialogueCharacter(name=learner, role=occupation or self.default_role),
                DialogueCharacter(name=self.partner_name, role=self.partner_name),
            ],
            dialogue=lines,
            instructions=self.dialogue_instructions,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(level={self.level!r})"
