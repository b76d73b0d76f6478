"""Crop the working grid, number the clues, build the display Grid."""

from __future__ import annotations

from dataclasses import replace

from grid_placer import WorkingGrid
from models import CellType, Clue, Direction, Grid, Placement


def crop_grid(
    working: WorkingGrid, placed: list[Placement]
) -> tuple[WorkingGrid, list[Placement]]:
    """Slice *working* to the bounding box of its letters and shift *placed*."""
    min_r = min_c = None
    max_r = max_c = -1
    for r, row in enumerate(working):
        for c, letter in enumerate(row):
            if letter is None:
                continue
            min_r = r if min_r is None else min(min_r, r)
            min_c = c if min_c is None else min(min_c, c)
            max_r, max_c = max(max_r, r), max(max_c, c)

    if min_r is None:
        return [], []

    cropped = [row[min_c:max_c + 1] for row in working[min_r:max_r + 1]]
    shifted = [replace(p, row=p.row - min_r, col=p.col - min_c) for p in placed]
    return cropped, shifted


def number_clues(placed: list[Placement]) -> list[Clue]:
    """Scan placements by (row, col) and give each distinct start cell a number.

    An across and a down word starting on the same cell share one number.
    """
    numbers: dict[tuple[int, int], int] = {}
    clues: list[Clue] = []

    for p in sorted(placed, key=lambda p: (p.row, p.col)):
        start = (p.row, p.col)
        if start not in numbers:
            numbers[start] = len(numbers) + 1
        clues.append(Clue(
            number=numbers[start],
            direction=p.direction,
            text=p.clue_text,
            answer=p.word,
            row=p.row,
            col=p.col,
            element=p.element,
        ))

    return clues


def build_grid(working: WorkingGrid, clues: list[Clue]) -> Grid:
    """Create the display Grid: letters from *working*, numbers from *clues*."""
    rows = len(working)
    cols = len(working[0]) if rows else 0
    grid = Grid.create(rows, cols)

    for r, row in enumerate(working):
        for c, letter in enumerate(row):
            if letter is None:
                continue
            cell = grid.cells[r][c]
            cell.cell_type = CellType.WHITE
            cell.letter = letter

    for clue in clues:
        grid.cells[clue.row][clue.col].number = clue.number

    return grid


def grid_from_placements(placed: list[Placement], rows: int, cols: int) -> WorkingGrid:
    """Write every placement into a fresh working grid, checking crossings."""
    working: WorkingGrid = [[None] * cols for _ in range(rows)]
    for p in placed:
        for (r, c), letter in zip(p.cells, p.word):
            existing = working[r][c]
            if existing is not None and existing != letter:
                raise ValueError(
                    f"Letter conflict at ({r},{c}): existing '{existing}' vs '{letter}'"
                )
            working[r][c] = letter
    return working


def build_clue_lists(clues: list[Clue]) -> tuple[list[Clue], list[Clue]]:
    """Split *clues* into across and down lists, each sorted by number."""
    across = sorted((c for c in clues if c.direction == Direction.ACROSS), key=lambda c: c.number)
    down = sorted((c for c in clues if c.direction == Direction.DOWN), key=lambda c: c.number)
    return across, down
