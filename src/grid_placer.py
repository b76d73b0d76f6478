"""Crossword word placement: longest word first, then first-fit intersections."""

from __future__ import annotations

import random
from typing import Optional

from models import Candidate, Direction, Placement

WorkingGrid = list[list[Optional[str]]]

WORKING_GRID_SIZE = 25


def new_working_grid(size: int = WORKING_GRID_SIZE) -> WorkingGrid:
    return [[None] * size for _ in range(size)]


def place_candidates(
    candidates: list[Candidate],
    rng: random.Random,
    grid_size: int = WORKING_GRID_SIZE,
) -> tuple[WorkingGrid, list[Placement]]:
    """Lay out *candidates* (already sorted longest first) on a working grid.

    The first candidate goes across through the middle row. Each later one is
    tried against the placed words in random order and committed at the first
    legal crossing; candidates that cannot cross anything are dropped.
    """
    working = new_working_grid(grid_size)
    placed: list[Placement] = []
    if not candidates:
        return working, placed

    first, *rest = candidates
    if len(first.word) > grid_size:
        return working, placed
    row = grid_size // 2
    col = (grid_size - len(first.word)) // 2
    _place_word(first, row, col, Direction.ACROSS, working, placed)

    for candidate in rest:
        spot = _find_crossing(candidate.word, working, placed, rng)
        if spot is not None:
            _place_word(candidate, *spot, working, placed)

    return working, placed


# ── Candidate finding ─────────────────────────────────────────────────

def _find_crossing(
    word: str,
    working: WorkingGrid,
    placed: list[Placement],
    rng: random.Random,
) -> tuple[int, int, Direction] | None:
    """First legal (row, col, direction) crossing a placed word, or None."""
    order = list(placed)
    rng.shuffle(order)

    for existing in order:
        direction = existing.direction.opposite
        for i, shared in enumerate(existing.word):
            for j, letter in enumerate(word):
                if letter != shared:
                    continue
                if direction == Direction.DOWN:
                    row, col = existing.row - j, existing.col + i
                else:
                    row, col = existing.row + i, existing.col - j
                if is_valid_placement(word, row, col, direction, working):
                    return row, col, direction
    return None


# ── Validation ────────────────────────────────────────────────────────

def is_valid_placement(
    word: str, row: int, col: int, direction: Direction, working: WorkingGrid,
) -> bool:
    """Check bounds, letter agreement, side contact and end-to-end contact.

    An empty target cell must have no occupied neighbour across the word's
    direction; occupied target cells must already hold the same letter.
    """
    if row < 0 or col < 0:
        return False

    rows = len(working)
    cols = len(working[0]) if rows else 0
    length = len(word)
    dr, dc = direction.step

    if row + dr * (length - 1) >= rows or col + dc * (length - 1) >= cols:
        return False

    # Perpendicular offsets
    pr, pc = dc, dr

    for i, letter in enumerate(word):
        r = row + dr * i
        c = col + dc * i
        existing = working[r][c]

        if existing is not None:
            if existing != letter:
                return False
            continue

        if _occupied(working, r - pr, c - pc) or _occupied(working, r + pr, c + pc):
            return False

    # Cell before start and cell after end must be empty/edge
    if _occupied(working, row - dr, col - dc):
        return False
    if _occupied(working, row + dr * length, col + dc * length):
        return False

    return True


def _occupied(working: WorkingGrid, r: int, c: int) -> bool:
    return 0 <= r < len(working) and 0 <= c < len(working[r]) and working[r][c] is not None


# ── Grid manipulation ─────────────────────────────────────────────────

def _place_word(
    candidate: Candidate, row: int, col: int, direction: Direction,
    working: WorkingGrid, placed: list[Placement],
) -> None:
    _place_on_grid(candidate.word, row, col, direction, working)
    placed.append(Placement(
        word=candidate.word, clue_text=candidate.clue_text, element=candidate.element,
        row=row, col=col, direction=direction,
    ))


def _place_on_grid(
    word: str, row: int, col: int, direction: Direction, working: WorkingGrid,
) -> None:
    dr, dc = direction.step
    for i, letter in enumerate(word):
        working[row + dr * i][col + dc * i] = letter
