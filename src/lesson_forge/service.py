"""Lesson generation orchestrator.

One request runs as a sequential pipeline:

    validate input -> continuity lookup -> prompt -> failover generate
    (optionally retried) -> decode/repair -> lesson model -> validation
    -> dialogue enforcement

The service holds only collaborators and configuration; no per-request state
is kept, so one instance can serve independent requests.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from dataclasses import dataclass
from typing import Sequence

from tqdm import tqdm

from lesson_forge.constants.levels import (
    DEFAULT_INSTANT_FOCUS,
    DEFAULT_LEARNER_NAME,
    GRAMMAR_DIALOGUE_PRACTICE,
    INSTANT_FOCUSES,
    LESSON_TYPE_INSTANT,
    LEVEL_A1,
    LONG_SESSION,
    SESSION_DURATIONS,
)
from lesson_forge.continuity import ContinuityContext, VocabularyContinuityTracker
from lesson_forge.errors import (
    AllProvidersFailedError,
    DecodeError,
    LessonRejectedError,
)
from lesson_forge.levels.base import LevelPolicy
from lesson_forge.levels.dispatcher import LessonPolicyDispatcher
from lesson_forge.llm.decoder import ResponseDecoder
from lesson_forge.llm.failover import FailoverResult, TextGenerationClient
from lesson_forge.llm.retry import RetryPolicy, call_with_retry
from lesson_forge.models import (
    DialogueContent,
    GeneratedLesson,
    GrammarLesson,
    LearnerProfile,
    LearningPlan,
    LearningTopic,
)
from lesson_forge.prompts import (
    build_grammar_lesson_prompt,
    build_instant_lesson_prompt,
    build_learning_plan_prompt,
    build_lesson_prompt,
)
from lesson_forge.settings import Settings, build_providers
from lesson_forge.storage.lesson_store import LessonStore
from lesson_forge.validation.dialogue import (
    DialogueEnforcement,
    TurnTakingViolation,
    audit_dialogue,
)
from lesson_forge.validation.post_generation import PostGenerationValidator, ValidationReport
from lesson_forge.validation.vocabulary_audit import find_off_level_words

logger = logging.getLogger(__name__)


@dataclass
class GenerationOutcome:
    """A lesson together with how it was produced.

    Attributes:
        lesson: The generated lesson.
        report: Validation findings for the lesson.
        provider_used: Provider that produced the text; None for template lessons.
        used_template: True if the deterministic tier lesson was returned.
        continuity: Continuity context used for the prompt, if any.
        off_level_words: Lesson vocabulary outside the tier accept-set (informational).
    """

    lesson: GeneratedLesson
    report: ValidationReport
    provider_used: str | None = None
    used_template: bool = False
    continuity: ContinuityContext | None = None
    off_level_words: list[str] = dataclasses.field(default_factory=list)


# (goal keywords, methodology, reasoning); first match wins
_COMMUNICATION_GOALS = ("conversation", "speaking", "communication", "travel", "social")
_PROFESSIONAL_GOALS = ("work", "business", "professional", "job")
_STRUCTURE_WEAKNESSES = ("grammar", "structure")
_ACADEMIC_GOALS = ("exam", "academic")

REASONING_CLT = (
    "Selected CLT (Communicative Language Teaching) because the student's goals emphasize "
    "real-world communication, speaking practice, and interactive scenarios."
)
REASONING_TBLT = (
    "Selected TBLT (Task-Based Language Teaching) because the student has professional or "
    "work-related goals; lessons center on real-world tasks from their professional context."
)
REASONING_PPP = (
    "Selected PPP (Presentation, Practice, Production) because the student is a beginner or "
    "has grammar weaknesses; accuracy is built gradually before free production."
)
REASONING_DEFAULT = (
    "Selected CLT (Communicative Language Teaching) as the default methodology, focusing on "
    "real-life communication and speaking practice."
)


def select_methodology(profile: LearnerProfile) -> tuple[str, str]:
    """Choose a teaching methodology from goals, occupation, level and weaknesses.

    Returns:
        (methodology code, reasoning text)
    """
    goals = (profile.goals or "").lower()
    weaknesses = (profile.weaknesses or "").lower()

    if any(keyword in goals for keyword in _COMMUNICATION_GOALS):
        return "CLT", REASONING_CLT
    if any(keyword in goals for keyword in _PROFESSIONAL_GOALS) or profile.occupation:
        return "TBLT", REASONING_TBLT
    if (
        profile.level == LEVEL_A1
        or any(keyword in weaknesses for keyword in _STRUCTURE_WEAKNESSES)
        or any(keyword in goals for keyword in _ACADEMIC_GOALS)
    ):
        return "PPP", REASONING_PPP
    return "CLT", REASONING_DEFAULT


class GenerationService:
    """Generates lessons and learning plans for a learner.

    Args:
        client: Failover text generation client.
        dispatcher: Tier policy dispatcher (defaults to all six tiers).
        decoder: JSON decoder (defaults to ResponseDecoder()).
        validator: Post-generation validator.
        tracker: Optional continuity tracker; used when a learner_id is given.
        retry_policy: Optional retry policy wrapped around each failover call.
        dialogue_enforcement: LOG keeps lessons with turn-taking violations,
            REJECT raises LessonRejectedError.
        fallback_to_template: Return the deterministic tier lesson when
            providers or decoding fail, instead of raising.
        cancel_event: Cancels retry waits when set.
    """

    def __init__(
        self,
        client: TextGenerationClient,
        dispatcher: LessonPolicyDispatcher | None = None,
        decoder: ResponseDecoder | None = None,
        validator: PostGenerationValidator | None = None,
        tracker: VocabularyContinuityTracker | None = None,
        retry_policy: RetryPolicy | None = None,
        dialogue_enforcement: DialogueEnforcement = DialogueEnforcement.LOG,
        fallback_to_template: bool = False,
        cancel_event: threading.Event | None = None,
    ):
        self.client = client
        self.dispatcher = dispatcher or LessonPolicyDispatcher()
        self.decoder = decoder or ResponseDecoder()
        self.validator = validator or PostGenerationValidator()
        self.tracker = tracker
        self.retry_policy = retry_policy
        self.dialogue_enforcement = DialogueEnforcement(dialogue_enforcement)
        self.fallback_to_template = fallback_to_template
        self.cancel_event = cancel_event

    @classmethod
    def from_settings(
        cls, settings: Settings, store: LessonStore | None = None, **kwargs
    ) -> GenerationService:
        """Build a service from Settings (providers, sampling, retry, enforcement)."""
        providers = build_providers(settings)
        if not providers:
            logger.warning("No providers configured; generation will fail until keys are set")
        return cls(
            client=TextGenerationClient(providers, settings.generation),
            tracker=VocabularyContinuityTracker(store) if store is not None else None,
            retry_policy=RetryPolicy(max_attempts=settings.retry_attempts),
            dialogue_enforcement=settings.dialogue_enforcement,
            **kwargs,
        )

    # =========================================================================
    # Lessons
    # =========================================================================

    def generate_lesson(
        self,
        profile: LearnerProfile,
        topic: LearningTopic,
        duration: int = LONG_SESSION,
        learner_id: str | None = None,
    ) -> GeneratedLesson:
        """Generate a lesson with the provider chain.

        Raises:
            ValueError: If duration is not a supported session length.
            UnsupportedTierError: If the learner's tier has no policy.
            AllProvidersFailedError: If every provider failed (unless falling back to template).
            DecodeError: If the response holds no recoverable JSON (unless falling back).
            LessonRejectedError: In REJECT mode, if a dialogue breaks turn-taking.
        """
        return self.generate_lesson_with_report(profile, topic, duration, learner_id).lesson

    def generate_lesson_with_report(
        self,
        profile: LearnerProfile,
        topic: LearningTopic,
        duration: int = LONG_SESSION,
        learner_id: str | None = None,
    ) -> GenerationOutcome:
        """Same as generate_lesson, returning the lesson with its validation report."""
        self._check_duration(duration)
        policy = self.dispatcher.get_policy(profile.level)

        continuity = None
        if self.tracker is not None and learner_id:
            continuity = self.tracker.get_continuity_context(learner_id)
            if continuity.should_reuse and continuity.previous_vocabulary:
                topic = dataclasses.replace(
                    topic,
                    previous_vocabulary=continuity.words,
                    reuse_previous_vocabulary=True,
                )

        prompt = build_lesson_prompt(
            profile, topic, duration, policy.get_vocabulary_guide(), continuity
        )

        try:
            result = self._generate_text(prompt)
            data = self.decoder.decode(result.raw_text)
        except (AllProvidersFailedError, DecodeError) as e:
            if not self.fallback_to_template:
                raise
            logger.warning(f"Falling back to {profile.level} template for '{topic.title}': {e}")
            lesson = self.dispatcher.generate_lesson(profile, topic, duration)
            report = self.validator.validate(lesson, profile)
            return GenerationOutcome(
                lesson=lesson, report=report, used_template=True, continuity=continuity
            )

        lesson = GeneratedLesson.from_dict(data)
        lesson.title = lesson.title or topic.title
        lesson.duration = lesson.duration or duration
        return self._finish_lesson(lesson, profile, policy, result, continuity)

    def generate_template_lesson(
        self, profile: LearnerProfile, topic: LearningTopic, duration: int = LONG_SESSION
    ) -> GeneratedLesson:
        """Deterministic tier lesson; no provider call."""
        self._check_duration(duration)
        return self.dispatcher.generate_lesson(profile, topic, duration)

    def generate_lessons(
        self,
        profile: LearnerProfile,
        topics: Sequence[LearningTopic],
        duration: int = LONG_SESSION,
        learner_id: str | None = None,
        progress: bool = True,
    ) -> list[GeneratedLesson]:
        """Generate one lesson per topic, sequentially, in topic order."""
        iterator = tqdm(topics, desc="Generating lessons") if progress else topics
        return [
            self.generate_lesson(profile, topic, duration, learner_id=learner_id)
            for topic in iterator
        ]

    def generate_instant_lesson(
        self,
        profile: LearnerProfile,
        situation: str,
        focus: str = DEFAULT_INSTANT_FOCUS,
        duration: int = LONG_SESSION,
    ) -> GeneratedLesson:
        """Same as generate_instant_lesson_with_report, returning only the lesson."""
        return self.generate_instant_lesson_with_report(profile, situation, focus, duration).lesson

    def generate_instant_lesson_with_report(
        self,
        profile: LearnerProfile,
        situation: str,
        focus: str = DEFAULT_INSTANT_FOCUS,
        duration: int = LONG_SESSION,
    ) -> GenerationOutcome:
        """Generate a four-exercise lesson preparing the learner for one situation.

        The lesson (vocabulary, preparation, dialogue, final preparation) goes
        through the same validation and dialogue enforcement as topic lessons.

        Raises:
            ValueError: If the situation is empty, the focus or the duration unsupported.
            UnsupportedTierError: If the learner's tier has no policy.
            AllProvidersFailedError: If every provider failed.
            DecodeError: If the response holds no recoverable JSON.
            LessonRejectedError: In REJECT mode, if a dialogue breaks turn-taking.
        """
        situation = situation.strip()
        if not situation:
            raise ValueError("Instant lesson situation is required")
        if focus not in INSTANT_FOCUSES:
            raise ValueError(f"Unsupported lesson focus: {focus}. Available: {list(INSTANT_FOCUSES)}")
        self._check_duration(duration)
        policy = self.dispatcher.get_policy(profile.level)

        prompt = build_instant_lesson_prompt(
            profile, situation, focus, duration, policy.get_vocabulary_guide()
        )
        result = self._generate_text(prompt)
        data = self.decoder.decode(result.raw_text)

        lesson = GeneratedLesson.from_dict(data)
        if not data.get("lessonType"):
            lesson.lesson_type = LESSON_TYPE_INSTANT
        lesson.title = lesson.title or f"Instant Lesson: {situation}"
        lesson.duration = lesson.duration or duration
        lesson.difficulty = lesson.difficulty or policy.rank
        return self._finish_lesson(lesson, profile, policy, result)

    # =========================================================================
    # Grammar lessons
    # =========================================================================

    def generate_grammar_lesson(self, profile: LearnerProfile, grammar_topic: str) -> GrammarLesson:
        """Generate a grammar lesson on one grammar point, contextualized to the learner.

        Explanation length and exercise item counts scale with the learner's tier.
        The dialogue-practice exercise is audited for turn-taking like any dialogue.

        Raises:
            ValueError: If the grammar topic is empty.
            UnsupportedTierError: If the learner's tier has no policy.
            AllProvidersFailedError: If every provider failed.
            DecodeError: If the response holds no recoverable JSON or no exercises.
            LessonRejectedError: In REJECT mode, if the dialogue breaks turn-taking.
        """
        grammar_topic = grammar_topic.strip()
        if not grammar_topic:
            raise ValueError("Grammar topic is required")
        self.dispatcher.get_policy(profile.level)

        prompt = build_grammar_lesson_prompt(profile, grammar_topic)
        result = self._generate_text(prompt)
        data = self.decoder.decode(result.raw_text)

        lesson = GrammarLesson.from_dict(data)
        if not lesson.exercises:
            raise DecodeError("Grammar lesson response contains no exercises")
        lesson.grammar_topic = lesson.grammar_topic or grammar_topic
        lesson.title = lesson.title or grammar_topic

        learner = profile.name or DEFAULT_LEARNER_NAME
        violations = [
            violation
            for exercise in lesson.exercises_of_type(GRAMMAR_DIALOGUE_PRACTICE)
            for violation in audit_dialogue(
                DialogueContent.from_raw(exercise.content), learner, exercise.title
            )
        ]
        self._enforce_dialogue(lesson.title, violations)

        logger.info(
            f"Generated {profile.level} grammar lesson '{lesson.title}' with "
            f"{result.provider_used} ({len(lesson.exercises)} exercises)"
        )
        return lesson

    # =========================================================================
    # Learning plan
    # =========================================================================

    def generate_learning_plan(self, profile: LearnerProfile) -> LearningPlan:
        """Generate a ten-topic learning plan in the methodology chosen for the learner.

        Raises:
            UnsupportedTierError: If the learner's tier has no policy.
            AllProvidersFailedError: If every provider failed.
            DecodeError: If the response holds no recoverable JSON or no topics.
        """
        self.dispatcher.get_policy(profile.level)
        methodology, reasoning = select_methodology(profile)
        prompt = build_learning_plan_prompt(profile, methodology, reasoning)

        result = self._generate_text(prompt)
        data = self.decoder.decode(result.raw_text)
        raw_topics = data.get("topics")
        if not isinstance(raw_topics, list) or not raw_topics:
            raise DecodeError("Learning plan response contains no topics")

        topics = [
            LearningTopic.from_dict({**raw, "methodology": raw.get("methodology") or methodology})
            for raw in raw_topics
            if isinstance(raw, dict)
        ]
        logger.info(
            f"Generated {len(topics)}-topic {methodology} plan for {profile.name or 'learner'} "
            f"with {result.provider_used}"
        )
        return LearningPlan(
            selected_methodology=methodology, methodology_reasoning=reasoning, topics=topics
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    def _finish_lesson(
        self,
        lesson: GeneratedLesson,
        profile: LearnerProfile,
        policy: LevelPolicy,
        result: FailoverResult,
        continuity: ContinuityContext | None = None,
    ) -> GenerationOutcome:
        report = self.validator.validate(lesson, profile)
        off_level = find_off_level_words(lesson.vocabulary, policy)
        self._enforce_dialogue(lesson.title, report.turn_taking_violations)

        logger.info(
            f"Generated {profile.level} lesson '{lesson.title}' with {result.provider_used} "
            f"({len(lesson.exercises)} exercises)"
        )
        return GenerationOutcome(
            lesson=lesson,
            report=report,
            provider_used=result.provider_used,
            continuity=continuity,
            off_level_words=off_level,
        )

    def _enforce_dialogue(self, title: str, violations: list[TurnTakingViolation]) -> None:
        if self.dialogue_enforcement == DialogueEnforcement.REJECT and violations:
            details = "; ".join(str(v) for v in violations)
            raise LessonRejectedError(f"Lesson '{title}' rejected: {details}", violations=violations)

    @staticmethod
    def _check_duration(duration: int) -> None:
        if duration not in SESSION_DURATIONS:
            raise ValueError(
                f"Unsupported lesson duration: {duration}. Available: {list(SESSION_DURATIONS)}"
            )

    def _generate_text(self, prompt: str) -> FailoverResult:
        if self.retry_policy is None or self.retry_policy.max_attempts <= 1:
            return self.client.generate(prompt)
        return call_with_retry(
            lambda: self.client.generate(prompt),
            policy=self.retry_policy,
            cancel_event=self.cancel_event,
        )
