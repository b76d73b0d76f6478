"""Bounded-retry crossword generation with a reduced-pool fallback."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass, field

from grid_builder import build_grid, crop_grid, number_clues
from grid_placer import WORKING_GRID_SIZE, WorkingGrid, place_candidates
from models import ChemicalElement, Clue, Grid, Placement
from word_pool import MAX_WORD_LENGTH, MIN_WORD_LENGTH, build_candidates, sort_for_placement

LOGGER = logging.getLogger(__name__)


@dataclass
class GeneratorConfig:
    grid_size: int = WORKING_GRID_SIZE
    min_words: int = 10
    max_attempts: int = 50
    fallback_pool_size: int = 15
    min_word_length: int = MIN_WORD_LENGTH
    max_word_length: int = MAX_WORD_LENGTH


@dataclass
class Puzzle:
    """A cropped, numbered crossword ready to be solved."""

    solution: WorkingGrid
    grid: Grid
    clues: list[Clue]
    placements: list[Placement]
    unplaced: list[str] = field(default_factory=list)

    @property
    def rows(self) -> int:
        return len(self.solution)

    @property
    def cols(self) -> int:
        return len(self.solution[0]) if self.solution else 0

    @property
    def word_count(self) -> int:
        return len(self.placements)


@dataclass
class AttemptResult:
    ok: bool
    puzzle: Puzzle | None = None
    reason: str = ""


@dataclass
class GenerationResult:
    puzzle: Puzzle
    attempts: int
    used_fallback: bool = False

    @property
    def word_count(self) -> int:
        return self.puzzle.word_count


def generate_crossword(
    elements: Sequence[ChemicalElement],
    rng: random.Random | None = None,
    config: GeneratorConfig | None = None,
) -> GenerationResult:
    """Run up to ``config.max_attempts`` attempts, then the fallback.

    Never raises: when no attempt reaches ``config.min_words`` the fallback
    result over the first ``config.fallback_pool_size`` records is returned
    as is, however few words it holds.
    """
    rng = rng or random.Random()
    config = config or GeneratorConfig()

    for attempt in range(1, config.max_attempts + 1):
        result = try_generate(elements, rng, config)
        if result.ok:
            LOGGER.info(
                "Crossword generated on attempt %d/%d with %d words",
                attempt, config.max_attempts, result.puzzle.word_count,
            )
            return GenerationResult(puzzle=result.puzzle, attempts=attempt)
        LOGGER.debug("Attempt %d/%d failed: %s", attempt, config.max_attempts, result.reason)

    LOGGER.warning(
        "No layout with %d words after %d attempts, falling back to the first %d records",
        config.min_words, config.max_attempts, config.fallback_pool_size,
    )
    fallback = try_generate(
        elements[:config.fallback_pool_size], rng, config, require_pool=False
    )
    return GenerationResult(
        puzzle=fallback.puzzle, attempts=config.max_attempts + 1, used_fallback=True
    )


def try_generate(
    elements: Sequence[ChemicalElement],
    rng: random.Random,
    config: GeneratorConfig,
    require_pool: bool = True,
) -> AttemptResult:
    """One shuffle -> normalize -> place -> crop -> number pass.

    With *require_pool* an attempt whose candidate pool is already smaller
    than ``config.min_words`` stops early. The returned puzzle is always set
    unless the attempt stopped early.
    """
    shuffled = list(elements)
    rng.shuffle(shuffled)
    candidates = build_candidates(
        shuffled, rng, config.min_word_length, config.max_word_length
    )
    if require_pool and len(candidates) < config.min_words:
        return AttemptResult(
            ok=False,
            reason=f"insufficient word pool ({len(candidates)} < {config.min_words})",
        )

    ordered = sort_for_placement(candidates)
    working, placed = place_candidates(ordered, rng, config.grid_size)
    solution, placed = crop_grid(working, placed)
    clues = number_clues(placed)
    placed_words = {p.word for p in placed}
    puzzle = Puzzle(
        solution=solution,
        grid=build_grid(solution, clues),
        clues=clues,
        placements=placed,
        unplaced=[c.word for c in ordered if c.word not in placed_words],
    )

    if puzzle.word_count < config.min_words:
        return AttemptResult(
            ok=False,
            puzzle=puzzle,
            reason=f"placed {puzzle.word_count} words (minimum {config.min_words})",
        )
    return AttemptResult(ok=True, puzzle=puzzle)
