"""Clue sentences built from element attributes."""

from __future__ import annotations

import random
from collections.abc import Iterable
from dataclasses import dataclass

from models import ChemicalElement


@dataclass(frozen=True)
class ClueTemplate:
    attribute: str
    pattern: str

    def render(self, element: ChemicalElement) -> str | None:
        """Return the sentence, or None when the attribute is empty."""
        value = getattr(element, self.attribute, "")
        if not value or not str(value).strip():
            return None
        return self.pattern.format(value=value)


CLUE_TEMPLATES: tuple[ClueTemplate, ...] = (
    ClueTemplate("atomic_number", "Elemento con numero atomico {value}"),
    ClueTemplate("symbol", "Il suo simbolo è {value}"),
    ClueTemplate("discovery_year", "Scoperto nel {value}"),
    ClueTemplate("name_origin", "Il suo nome deriva da: {value}"),
    ClueTemplate("chemical_traits", "Caratteristica: {value}"),
    ClueTemplate("industrial_use", "Utilizzato per: {value}"),
    ClueTemplate("historical_trivia", "Curiosità: {value}"),
)


def available_clues(
    element: ChemicalElement, exclude: Iterable[str] = ()
) -> list[str]:
    """All sentences for *element*, in template order, minus *exclude*."""
    excluded = set(exclude)
    clues: list[str] = []
    for template in CLUE_TEMPLATES:
        text = template.render(element)
        if text is not None and text not in excluded:
            clues.append(text)
    return clues


def pick_clue(
    element: ChemicalElement,
    rng: random.Random,
    exclude: Iterable[str] = (),
) -> str | None:
    """Pick one unused sentence at random; None when none are left."""
    clues = available_clues(element, exclude)
    if not clues:
        return None
    return rng.choice(clues)
