"""CEFR tier constants shared by policies, validators and the service."""

LEVEL_A1 = "A1"
LEVEL_A2 = "A2"
LEVEL_B1 = "B1"
LEVEL_B2 = "B2"
LEVEL_C1 = "C1"
LEVEL_C2 = "C2"

CEFR_LEVELS: tuple[str, ...] = (LEVEL_A1, LEVEL_A2, LEVEL_B1, LEVEL_B2, LEVEL_C1, LEVEL_C2)

# Fixed difficulty rank of each tier (A1=1 ... C2=6)
LEVEL_RANKS: dict[str, int] = {level: rank for rank, level in enumerate(CEFR_LEVELS, start=1)}

# Session lengths in minutes
SHORT_SESSION = 25
LONG_SESSION = 50
SESSION_DURATIONS: tuple[int, ...] = (SHORT_SESSION, LONG_SESSION)

METHODOLOGIES: tuple[str, ...] = ("CLT", "TBLT", "PPP", "TTT")

# =============================================================================
# Exercise types
# =============================================================================

EXERCISE_VOCABULARY = "vocabulary"
EXERCISE_GRAMMAR = "grammar"
EXERCISE_DIALOGUE = "dialogue"
EXERCISE_DISCUSSION = "discussion"
EXERCISE_COMPREHENSION = "comprehension"
EXERCISE_ROLEPLAY = "roleplay"
EXERCISE_WARMUP = "warmup"
EXERCISE_EXPRESSIONS = "expressions"
EXERCISE_PREPARATION = "preparation"
EXERCISE_FINAL_PREP = "finalprep"

# Grammar lesson exercise types, in lesson order
GRAMMAR_FOCUS = "grammar-focus"
GRAMMAR_SENTENCE_PRACTICE = "sentence-practice"
GRAMMAR_DIALOGUE_PRACTICE = "dialogue-practice"
GRAMMAR_FILL_BLANKS = "fill-blanks"
GRAMMAR_MULTIPLE_CHOICE = "multiple-choice"
GRAMMAR_SENTENCE_BUILDING = "sentence-building"
GRAMMAR_EXERCISE_TYPES: tuple[str, ...] = (
    GRAMMAR_FOCUS,
    GRAMMAR_SENTENCE_PRACTICE,
    GRAMMAR_DIALOGUE_PRACTICE,
    GRAMMAR_FILL_BLANKS,
    GRAMMAR_MULTIPLE_CHOICE,
    GRAMMAR_SENTENCE_BUILDING,
)

# Instant lessons
INSTANT_FOCUSES: tuple[str, ...] = ("speaking", "vocabulary", "grammar", "listening", "mixed")
DEFAULT_INSTANT_FOCUS = "mixed"
LESSON_TYPE_INSTANT = "instant"

DEFAULT_LEARNER_NAME = "Student"

# Continuity window: prior vocabulary is reused when the last shared lesson
# is at most this many lessons back.
CONTINUITY_MAX_LESSONS_BACK = 2
CONTINUITY_LOOKBACK = 3
