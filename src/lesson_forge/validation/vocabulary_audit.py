"""Offline audit of lesson vocabulary against a tier's accept-set."""

from __future__ import annotations

import logging
from typing import Iterable

from lesson_forge.levels.base import LevelPolicy

logger = logging.getLogger(__name__)


def find_off_level_words(words: Iterable[str], policy: LevelPolicy) -> list[str]:
    """Return the words the policy does not accept for its tier, in input order.

    Blank entries are skipped. The audit is informational; nothing is removed.
    """
    off_level = [w for w in words if w.strip() and not policy.is_word_acceptable_for_level(w)]
    if off_level:
        logger.debug(f"{len(off_level)} word(s) outside the {policy.level} accept-set: {off_level}")
    return off_level
