"""JSON extraction and repair for raw provider text.

Providers wrap JSON in prose or markdown fences and regularly emit invalid
JSON: trailing commas, stray control characters, unescaped quotes inside
string values, missing commas between sibling values. The decoder slices the
outermost ``{...}`` candidate and runs an ordered list of repair stages, each
building on the previous one, re-parsing after every stage and returning on
the first success.

Stages only repair punctuation and escaping; they never invent values.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable

from lesson_forge.constants.llm_config import DECODE_ERROR_WINDOW
from lesson_forge.errors import DecodeError

logger = logging.getLogger(__name__)

_TRAILING_COMMA_RE = re.compile(r",(\s*[}\]])")
_REPEATED_SPACES_RE = re.compile(r" {2,}")
# Control characters other than \t \n \r
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_WHITESPACE_CONTROLS_RE = re.compile(r"[\t\n\r]")
# A double-escaped \n, \t or \r ("\\\\n" in source) collapses to the single escape
_DOUBLE_ESCAPE_RE = re.compile(r"\\\\([ntr])")

# Characters that may legitimately follow a closing quote
_AFTER_STRING = frozenset(",:}]")
# Characters that start a JSON value
_VALUE_START = frozenset('{["-0123456789tfn')
_LITERAL_START = frozenset("-0123456789tfn")
_LITERAL_CHARS = frozenset("0123456789+-.eEtruefalsn")


def strip_trailing_commas(text: str) -> str:
    """Remove commas directly before a closing brace or bracket."""
    return _TRAILING_COMMA_RE.sub(r"\1", text)


def extract_candidate(raw_text: str) -> str:
    """Slice the text between the first '{' and the last '}' (inclusive).

    Raises:
        DecodeError: If no object delimiters are found, or they are out of order.
    """
    if not raw_text:
        raise DecodeError("No JSON found in provider response: empty text")
    start = raw_text.find("{")
    end = raw_text.rfind("}")
    if start == -1 or end == -1 or start >= end:
        raise DecodeError(
            f"No JSON found in provider response. Content preview: {raw_text[:200]!r}"
        )
    candidate = raw_text[start : end + 1]
    if not candidate.strip():
        raise DecodeError("No JSON found in provider response: empty candidate")
    return candidate


# =============================================================================
# Repair stages
# =============================================================================


def light_repair(text: str) -> str:
    """Stage 1: line endings, whitespace runs, trailing commas."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = text.replace("\t", " ")
    text = _REPEATED_SPACES_RE.sub(" ", text)
    return strip_trailing_commas(text)


def aggressive_repair(text: str) -> str:
    """Stage 2: control characters, doubled escapes, embedded quotes."""
    text = _CONTROL_CHARS_RE.sub("", text)
    # Raw newlines/tabs are illegal inside JSON strings and harmless between tokens
    text = _WHITESPACE_CONTROLS_RE.sub(" ", text)
    text = _DOUBLE_ESCAPE_RE.sub(r"\\\1", text)
    text = strip_trailing_commas(text)
    return escape_embedded_quotes(text)


def structural_repair(text: str) -> str:
    """Stage 3: insert missing commas between adjacent values."""
    return insert_missing_commas(text)


def _split_on_unescaped_quotes(text: str) -> list[str]:
    segments = []
    current: list[str] = []
    escaped = False
    for ch in text:
        if escaped:
            current.append(ch)
            escaped = False
        elif ch == "\\":
            current.append(ch)
            escaped = True
        elif ch == '"':
            segments.append("".join(current))
            current = []
        else:
            current.append(ch)
    segments.append("".join(current))
    return segments


def escape_embedded_quotes(text: str) -> str:
    """Escape quote characters that sit inside string values.

    The text is split on unescaped quotes; odd segments are string contents.
    While inside a string, a quote only closes it when the next non-blank
    character is a structural one (``, : } ]``) or the text ends. Any other
    quote is embedded in the value and gets escaped.

    Example:
        >>> escape_embedded_quotes('{"a": "a 6" ruler"}')
        '{"a": "a 6\\\\" ruler"}'
    """
    segments = _split_on_unescaped_quotes(text)
    if len(segments) == 1:
        return text

    out = [segments[0]]
    inside = False
    for i in range(1, len(segments)):
        following = segments[i]
        if not inside:
            out.append('"')
            out.append(following)
            inside = True
            continue

        stripped = following.lstrip()
        is_last = i == len(segments) - 1
        closes = is_last or not stripped or stripped[0] in _AFTER_STRING
        if closes:
            out.append('"')
            inside = False
        else:
            out.append('\\"')
        out.append(following)
    return "".join(out)


def insert_missing_commas(text: str) -> str:
    """Insert a comma wherever one value ends and the next begins without one.

    Covers ``}{``, ``]{``, ``}[``, ``"a" "b"`` and ``1 "b"`` style boundaries.
    Content inside string literals is never touched.
    """
    out: list[str] = []
    in_string = False
    escaped = False
    in_literal = False
    value_closed = False  # last significant token ended a value

    for ch in text:
        if in_string:
            out.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
                value_closed = True
            continue

        if in_literal:
            if ch in _LITERAL_CHARS:
                out.append(ch)
                continue
            in_literal = False
            value_closed = True

        if ch.isspace():
            out.append(ch)
            continue

        if value_closed and ch in _VALUE_START:
            out.append(",")
        value_closed = False

        if ch == '"':
            in_string = True
        elif ch in "}]":
            value_closed = True
        elif ch in _LITERAL_START:
            in_literal = True
        out.append(ch)
    return "".join(out)


# Ordered (stage name, transform) pairs; each applies to the previous stage's output.
REPAIR_STAGES: list[tuple[str, Callable[[str], str]]] = [
    ("as-is", lambda text: text),
    ("light", light_repair),
    ("aggressive", aggressive_repair),
    ("structural", structural_repair),
]


class ResponseDecoder:
    """Turns raw provider text into a JSON object.

    Stateless; one instance can be shared across requests.

    Args:
        stages: Ordered (name, transform) repair stages. Defaults to REPAIR_STAGES.
        error_window: Chars of context reported around the final syntax error.
    """

    def __init__(
        self,
        stages: list[tuple[str, Callable[[str], str]]] | None = None,
        error_window: int = DECODE_ERROR_WINDOW,
    ):
        self.stages = stages or REPAIR_STAGES
        self.error_window = error_window

    def decode(self, raw_text: str) -> dict[str, Any]:
        """Extract and parse the JSON object embedded in raw_text.

        Raises:
            DecodeError: If no object is found or every repair stage fails.
        """
        candidate = extract_candidate(raw_text)

        last_error: json.JSONDecodeError | None = None
        for stage_name, transform in self.stages:
            candidate = transform(candidate)
            try:
                result = json.loads(candidate)
            except json.JSONDecodeError as e:
                last_error = e
                logger.debug(f"JSON parse failed after '{stage_name}' stage: {e}")
                continue

            if not isinstance(result, dict):
                raise DecodeError(f"Expected a JSON object, got {type(result).__name__}")
            if stage_name != self.stages[0][0]:
                logger.info(f"Recovered malformed JSON at '{stage_name}' repair stage")
            return result

        assert last_error is not None
        half = self.error_window // 2
        window = last_error.doc[max(0, last_error.pos - half) : last_error.pos + half]
        raise DecodeError(
            f"Failed to parse JSON after all repair stages: {last_error.msg} "
            f"(line {last_error.lineno}, column {last_error.colno}, char {last_error.pos})",
            position=last_error.pos,
            context=window,
        ) from last_error
