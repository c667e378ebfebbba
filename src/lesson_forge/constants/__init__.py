"""Project-wide constants."""

from lesson_forge.constants.levels import (
    CEFR_LEVELS,
    CONTINUITY_LOOKBACK,
    CONTINUITY_MAX_LESSONS_BACK,
    DEFAULT_LEARNER_NAME,
    EXERCISE_COMPREHENSION,
    EXERCISE_DIALOGUE,
    EXERCISE_DISCUSSION,
    EXERCISE_EXPRESSIONS,
    EXERCISE_GRAMMAR,
    EXERCISE_ROLEPLAY,
    EXERCISE_VOCABULARY,
    EXERCISE_WARMUP,
    LEVEL_RANKS,
    LONG_SESSION,
    METHODOLOGIES,
    SESSION_DURATIONS,
    SHORT_SESSION,
)
from lesson_forge.constants.llm_config import (
    DEFAULT_GEMINI_CHAIN,
    DEFAULT_MAX_OUTPUT_TOKENS,
    DEFAULT_PROVIDER_CHAIN,
    DEFAULT_TEMPERATURE,
    DEFAULT_TOP_K,
    DEFAULT_TOP_P,
    RETRYABLE_ERROR_MARKERS,
)

__all__ = [
    "CEFR_LEVELS",
    "CONTINUITY_LOOKBACK",
    "CONTINUITY_MAX_LESSONS_BACK",
    "DEFAULT_LEARNER_NAME",
    "EXERCISE_COMPREHENSION",
    "EXERCISE_DIALOGUE",
    "EXERCISE_DISCUSSION",
    "EXERCISE_EXPRESSIONS",
    "EXERCISE_GRAMMAR",
    "EXERCISE_ROLEPLAY",
    "EXERCISE_VOCABULARY",
    "EXERCISE_WARMUP",
    "LEVEL_RANKS",
    "LONG_SESSION",
    "METHODOLOGIES",
    "SESSION_DURATIONS",
    "SHORT_SESSION",
    "DEFAULT_GEMINI_CHAIN",
    "DEFAULT_MAX_OUTPUT_TOKENS",
    "DEFAULT_PROVIDER_CHAIN",
    "DEFAULT_TEMPERATURE",
    "DEFAULT_TOP_K",
    "DEFAULT_TOP_P",
    "RETRYABLE_ERROR_MARKERS",
]
