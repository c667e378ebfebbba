"""LLM configuration constants."""

# =============================================================================
# Generation parameters
# =============================================================================

DEFAULT_TEMPERATURE = 0.1  # Low but not zero: lessons need some variety
DEFAULT_TOP_K = 40
DEFAULT_TOP_P = 0.95
DEFAULT_MAX_OUTPUT_TOKENS = 8192

# =============================================================================
# Provider models
# =============================================================================

DEFAULT_MODEL_GEMINI = "gemini-2.5-flash"
DEFAULT_MODEL_OPENAI = "gpt-4.1-mini"
DEFAULT_MODEL_ANTHROPIC = "claude-3-5-haiku-20241022"

# Ordered by preference: higher capability / freshness first, then lighter models.
DEFAULT_GEMINI_CHAIN: tuple[str, ...] = (
    "gemini-2.5-flash",
    "gemini-2.5-pro",
    "gemini-2.0-flash",
    "gemini-2.0-flash-lite",
    "gemini-2.5-flash-lite",
)

# Provider chain used when LESSON_PROVIDER_CHAIN is not set.
# Format: "<provider>:<model>" entries, comma separated.
DEFAULT_PROVIDER_CHAIN = ",".join(f"gemini:{model}" for model in DEFAULT_GEMINI_CHAIN)

# =============================================================================
# Retry settings
# =============================================================================

DEFAULT_RETRY_ATTEMPTS = 3
DEFAULT_RETRY_BASE_DELAY = 1.0  # seconds, doubled per attempt
DEFAULT_RETRY_MAX_DELAY = 8.0
DEFAULT_RETRY_JITTER = 0.5

# Substrings (lowercase) that mark a transient provider failure worth retrying.
RETRYABLE_ERROR_MARKERS: tuple[str, ...] = (
    "overloaded",
    "unavailable",
    "503",
    "429",
    "rate limit",
    "resource exhausted",
)

# =============================================================================
# Decoder settings
# =============================================================================

DECODE_ERROR_WINDOW = 200  # chars of context around a JSON syntax error
