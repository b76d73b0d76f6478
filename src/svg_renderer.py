"""Render a crossword grid, or a solving session, as standalone SVG."""

from __future__ import annotations

from models import CellType, Grid
from solving_session import SolvingSession

HINT_FILL = "#c7d2fe"
CORRECTED_FILL = "#fecaca"
FONT = "Helvetica, Arial, sans-serif"


def render_svg(
    grid: Grid,
    output_path: str,
    show_answers: bool = False,
    cell_size: float | None = None,
    session: SolvingSession | None = None,
) -> None:
    """Write the crossword grid to an SVG file.

    With *session*, cells show the solver's letters and are tinted for hints
    and finish-time corrections instead of showing the answers.
    """
    if cell_size is None:
        cell_size = _default_cell_size(max(grid.rows, grid.cols))

    number_font = _number_font_size(max(grid.rows, grid.cols))
    letter_font = cell_size * 0.45
    width = cell_size * grid.cols
    height = cell_size * grid.rows

    parts: list[str] = []
    parts.append(
        f'<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}">\n'
    )

    for r in range(grid.rows):
        for c in range(grid.cols):
            cell = grid.cells[r][c]
            x = c * cell_size
            y = r * cell_size

            if cell.cell_type == CellType.BLACK:
                parts.append(
                    f'  <rect x="{x}" y="{y}" width="{cell_size}" '
                    f'height="{cell_size}" fill="black"/>\n'
                )
                continue

            letter = cell.letter if show_answers else None
            fill = "white"
            if session is not None:
                user_cell = session.user_grid[r][c]
                letter = user_cell.letter if user_cell is not None else None
                if user_cell is not None and user_cell.is_corrected:
                    fill = CORRECTED_FILL
                elif user_cell is not None and user_cell.is_hint:
                    fill = HINT_FILL

            parts.append(
                f'  <rect x="{x}" y="{y}" width="{cell_size}" '
                f'height="{cell_size}" fill="{fill}" '
                f'stroke="black" stroke-width="0.5"/>\n'
            )

            if cell.number is not None:
                tx = x + 1.5
                ty = y + number_font + 1
                parts.append(
                    f'  <text x="{tx}" y="{ty}" '
                    f'font-family="{FONT}" '
                    f'font-weight="bold" font-size="{number_font}" '
                    f'fill="black">{cell.number}</text>\n'
                )

            if letter:
                cx = x + cell_size * 0.55
                cy = y + cell_size * 0.58
                parts.append(
                    f'  <text x="{cx}" y="{cy}" '
                    f'text-anchor="middle" dominant-baseline="central" '
                    f'font-family="{FONT}" '
                    f'font-size="{letter_font}" '
                    f'fill="black">{letter}</text>\n'
                )

    # Outer border
    parts.append(
        f'  <rect x="0" y="0" width="{width}" height="{height}" '
        f'fill="none" stroke="black" stroke-width="1.5"/>\n'
    )
    parts.append('</svg>\n')

    with open(output_path, 'w', encoding='utf-8') as f:
        f.writelines(parts)


def render_puzzle_svg(grid: Grid, output_path: str) -> None:
    """Render puzzle grid (no answers) to SVG."""
    render_svg(grid, output_path, show_answers=False)


def render_answer_svg(grid: Grid, output_path: str) -> None:
    """Render answer grid (with letters) to SVG."""
    render_svg(grid, output_path, show_answers=True)


def render_session_svg(grid: Grid, session: SolvingSession, output_path: str) -> None:
    """Render the solver's current grid, hints and corrections included."""
    render_svg(grid, output_path, session=session)


def _default_cell_size(span: int) -> float:
    if span <= 15:
        return 24.0
    elif span <= 19:
        return 21.0
    else:
        return 17.0


def _number_font_size(span: int) -> float:
    if span <= 13:
        return 8.5
    elif span <= 15:
        return 8.0
    elif span <= 19:
        return 7.0
    else:
        return 6.0
