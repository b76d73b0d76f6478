"""Turn element records into placeable (word, clue) candidates."""

from __future__ import annotations

import logging
import random
import re
import unicodedata
from collections.abc import Sequence

from clue_templates import pick_clue
from models import Candidate, ChemicalElement

LOGGER = logging.getLogger(__name__)

MIN_WORD_LENGTH = 4
MAX_WORD_LENGTH = 14

_NON_LETTERS = re.compile(r"[^A-Z]")


def normalize_name(raw: str) -> str:
    """Uppercase, drop diacritics, strip everything except A-Z.

    >>> normalize_name("Uranio-238 (U)")
    'URANIOU'
    """
    decomposed = unicodedata.normalize("NFD", raw.upper())
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return _NON_LETTERS.sub("", stripped)


def is_usable_length(
    word: str,
    min_length: int = MIN_WORD_LENGTH,
    max_length: int = MAX_WORD_LENGTH,
) -> bool:
    return min_length <= len(word) <= max_length


def build_candidates(
    elements: Sequence[ChemicalElement],
    rng: random.Random,
    min_length: int = MIN_WORD_LENGTH,
    max_length: int = MAX_WORD_LENGTH,
) -> list[Candidate]:
    """Normalize, clue and filter *elements*, keeping their order.

    Words outside the length bounds, repeated words and elements without any
    clue-able attribute are skipped.
    """
    seen: set[str] = set()
    result: list[Candidate] = []

    for element in elements:
        word = normalize_name(element.name)
        if not is_usable_length(word, min_length, max_length):
            LOGGER.debug("Skipping %r (%d letters)", element.name, len(word))
            continue
        if word in seen:
            LOGGER.debug("Skipping duplicate word %s", word)
            continue
        clue_text = pick_clue(element, rng)
        if clue_text is None:
            LOGGER.debug("Skipping %s: no attribute to build a clue from", word)
            continue
        seen.add(word)
        result.append(Candidate(word=word, clue_text=clue_text, element=element))

    return result


def sort_for_placement(candidates: list[Candidate]) -> list[Candidate]:
    """Longest first; equal lengths keep their (shuffled) order."""
    return sorted(candidates, key=lambda c: len(c.word), reverse=True)
