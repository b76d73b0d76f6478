"""Solving session: an immutable record plus pure transition functions.

Every operation takes a :class:`SolvingSession` and returns a new one; the
input record is never mutated. Randomized hints take an explicit
``random.Random`` so tests can replay them.

Lifecycle::

    ACTIVE --begin_finish--> FINISHING --complete_finish--> FINISHED

Only an ACTIVE session accepts letters, hints and ticks.
"""

from __future__ import annotations

import random
from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import Any, Optional

from clue_templates import available_clues, pick_clue
from models import Clue, UserCell
from word_pool import normalize_name

SolutionGrid = tuple[tuple[Optional[str], ...], ...]
UserGrid = tuple[tuple[Optional[UserCell], ...], ...]


class SessionState(Enum):
    ACTIVE = "ACTIVE"
    FINISHING = "FINISHING"
    FINISHED = "FINISHED"


class Move(Enum):
    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)


@dataclass(frozen=True)
class SessionConfig:
    initial_letter_hints: int = 10
    random_letter_hints: int = 10
    initial_letter_cost: int = 5
    random_letter_cost: int = 2
    extra_clue_cost: int = 5
    tick_seconds: float = 1.0
    finish_delay_seconds: float = 3.0


@dataclass(frozen=True)
class SolvingSession:
    grid: SolutionGrid
    clues: tuple[Clue, ...]
    user_grid: UserGrid
    config: SessionConfig = field(default_factory=SessionConfig)
    state: SessionState = SessionState.ACTIVE
    elapsed_seconds: int = 0
    initial_letter_hints_remaining: int = 10
    random_letter_hints_remaining: int = 10
    initial_hints_used: int = 0
    random_hints_used: int = 0
    extra_clue_hints_used: int = 0
    penalty_points: int = 0
    focus: tuple[int, int] | None = None
    # clue key -> sentences already shown for that clue
    shown_clues: dict[tuple[int, str], tuple[str, ...]] = field(default_factory=dict)
    correct_letters: int = 0
    total_letters: int = 0

    @property
    def rows(self) -> int:
        return len(self.grid)

    @property
    def cols(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    @property
    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE

    @property
    def is_finished(self) -> bool:
        return self.state == SessionState.FINISHED

    def is_letter_cell(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols and self.grid[row][col] is not None

    def to_dict(self) -> dict[str, Any]:
        """Plain-data view of the session (JSON-compatible)."""
        return {
            "grid": [list(row) for row in self.grid],
            "clues": [
                {
                    "number": c.number,
                    "direction": c.direction.value,
                    "text": c.text,
                    "answer": c.answer,
                    "row": c.row,
                    "col": c.col,
                }
                for c in self.clues
            ],
            "user_grid": [
                [asdict(cell) if cell is not None else None for cell in row]
                for row in self.user_grid
            ],
            "config": asdict(self.config),
            "state": self.state.value,
            "elapsed_seconds": self.elapsed_seconds,
            "initial_letter_hints_remaining": self.initial_letter_hints_remaining,
            "random_letter_hints_remaining": self.random_letter_hints_remaining,
            "initial_hints_used": self.initial_hints_used,
            "random_hints_used": self.random_hints_used,
            "extra_clue_hints_used": self.extra_clue_hints_used,
            "penalty_points": self.penalty_points,
            "focus": list(self.focus) if self.focus is not None else None,
            "shown_clues": [
                {"number": number, "direction": direction, "texts": list(texts)}
                for (number, direction), texts in self.shown_clues.items()
            ],
            "correct_letters": self.correct_letters,
            "total_letters": self.total_letters,
        }


@dataclass(frozen=True)
class SummaryDetails:
    correct_letters: int
    total_letters: int
    initial_hints_used: int
    random_hints_used: int
    extra_clues_used: int
    penalty_points: int
    final_score: int


@dataclass(frozen=True)
class SessionSummary:
    score: str
    time: str
    details: SummaryDetails


def start_session(
    solution: list[list[Optional[str]]] | SolutionGrid,
    clues: list[Clue],
    config: SessionConfig | None = None,
) -> SolvingSession:
    """Fresh ACTIVE session over a solved grid; every user cell empty."""
    config = config or SessionConfig()
    grid = tuple(tuple(row) for row in solution)
    user_grid = tuple(tuple(None for _ in row) for row in grid)
    ordered = tuple(sorted(clues, key=lambda c: (c.number, c.direction.value)))
    return SolvingSession(
        grid=grid,
        clues=ordered,
        user_grid=user_grid,
        config=config,
        initial_letter_hints_remaining=config.initial_letter_hints,
        random_letter_hints_remaining=config.random_letter_hints,
        focus=(ordered[0].row, ordered[0].col) if ordered else None,
        shown_clues={c.key: (c.text,) for c in ordered},
    )


def tick(session: SolvingSession) -> SolvingSession:
    if not session.is_active:
        return session
    return replace(session, elapsed_seconds=session.elapsed_seconds + 1)


# ── Typing and navigation ─────────────────────────────────────────────

def input_letter(session: SolvingSession, row: int, col: int, value: str) -> SolvingSession:
    """Store the last typed letter at (row, col) and advance focus.

    Ignored when the session is not active, the cell is void or out of range,
    or the cell holds a hint. An empty *value* clears the cell; a value with
    no letter in it is ignored.
    """
    if not session.is_active or not session.is_letter_cell(row, col):
        return session
    current = session.user_grid[row][col]
    if current is not None and current.is_hint:
        return session

    letter = normalize_name(value)[-1:] if value else ""
    if value and not letter:
        return session

    cell = UserCell(letter=letter) if letter else None
    user_grid = _with_cell(session.user_grid, row, col, cell)
    focus = _advance(session, row, col) if letter else (row, col)
    return replace(session, user_grid=user_grid, focus=focus)


def set_focus(session: SolvingSession, row: int, col: int) -> SolvingSession:
    if not session.is_letter_cell(row, col):
        return session
    return replace(session, focus=(row, col))


def navigate(session: SolvingSession, move: Move) -> SolvingSession:
    """Move focus to the nearest letter cell in *move*'s direction.

    Void cells are skipped; at the grid edge focus stays put.
    """
    if session.focus is None:
        return session
    target = nearest_letter_cell(session, *session.focus, move)
    if target is None:
        return session
    return replace(session, focus=target)


def nearest_letter_cell(
    session: SolvingSession, row: int, col: int, move: Move
) -> tuple[int, int] | None:
    dr, dc = move.value
    r, c = row + dr, col + dc
    while 0 <= r < session.rows and 0 <= c < session.cols:
        if session.grid[r][c] is not None:
            return r, c
        r += dr
        c += dc
    return None


def _advance(session: SolvingSession, row: int, col: int) -> tuple[int, int]:
    if session.is_letter_cell(row, col + 1):
        return row, col + 1
    if session.is_letter_cell(row + 1, col):
        return row + 1, col
    return row, col


# ── Hints ─────────────────────────────────────────────────────────────

def clue_start_cells(session: SolvingSession) -> list[tuple[int, int]]:
    """Distinct start cells, in clue order."""
    seen: dict[tuple[int, int], None] = {}
    for clue in session.clues:
        seen.setdefault((clue.row, clue.col), None)
    return list(seen)


def is_correct(session: SolvingSession, row: int, col: int) -> bool:
    cell = session.user_grid[row][col]
    return cell is not None and cell.letter == session.grid[row][col]


def reveal_initial_letter(session: SolvingSession, rng: random.Random) -> SolvingSession:
    """Reveal the first letter of a random word as a protected hint.

    A no-op when the budget is spent, the session is not active, or every
    start cell is already a hint or already correct.
    """
    if not session.is_active or session.initial_letter_hints_remaining <= 0:
        return session
    eligible = [
        (r, c) for r, c in clue_start_cells(session)
        if not _is_hint(session, r, c) and not is_correct(session, r, c)
    ]
    if not eligible:
        return session

    r, c = rng.choice(eligible)
    return replace(
        session,
        user_grid=_with_cell(session.user_grid, r, c, UserCell(session.grid[r][c], is_hint=True)),
        initial_letter_hints_remaining=session.initial_letter_hints_remaining - 1,
        initial_hints_used=session.initial_hints_used + 1,
        penalty_points=session.penalty_points + session.config.initial_letter_cost,
    )


def reveal_random_letter(session: SolvingSession, rng: random.Random) -> SolvingSession:
    """Reveal one random empty or wrong cell as a protected hint."""
    if not session.is_active or session.random_letter_hints_remaining <= 0:
        return session
    eligible = [
        (r, c)
        for r in range(session.rows)
        for c in range(session.cols)
        if session.grid[r][c] is not None
        and not _is_hint(session, r, c)
        and not is_correct(session, r, c)
    ]
    if not eligible:
        return session

    r, c = rng.choice(eligible)
    return replace(
        session,
        user_grid=_with_cell(session.user_grid, r, c, UserCell(session.grid[r][c], is_hint=True)),
        random_letter_hints_remaining=session.random_letter_hints_remaining - 1,
        random_hints_used=session.random_hints_used + 1,
        penalty_points=session.penalty_points + session.config.random_letter_cost,
    )


def has_extra_clue(session: SolvingSession, clue: Clue) -> bool:
    """Whether another unseen sentence exists for *clue*."""
    if clue.element is None:
        return False
    return bool(available_clues(clue.element, _shown_for(session, clue)))


def request_extra_clue(
    session: SolvingSession, clue: Clue, rng: random.Random
) -> tuple[SolvingSession, str | None]:
    """Show one more sentence for *clue*; ``(session, None)`` when none is left."""
    if not session.is_active or clue.element is None:
        return session, None
    shown = _shown_for(session, clue)
    text = pick_clue(clue.element, rng, exclude=shown)
    if text is None:
        return session, None

    shown_clues = dict(session.shown_clues)
    shown_clues[clue.key] = shown + (text,)
    session = replace(
        session,
        shown_clues=shown_clues,
        extra_clue_hints_used=session.extra_clue_hints_used + 1,
        penalty_points=session.penalty_points + session.config.extra_clue_cost,
    )
    return session, text


def _shown_for(session: SolvingSession, clue: Clue) -> tuple[str, ...]:
    return session.shown_clues.get(clue.key, (clue.text,))


def _is_hint(session: SolvingSession, row: int, col: int) -> bool:
    cell = session.user_grid[row][col]
    return cell is not None and cell.is_hint


# ── Finishing and scoring ─────────────────────────────────────────────

def begin_finish(session: SolvingSession) -> SolvingSession:
    """Score the user's letters, then overwrite every wrong or empty cell.

    Matching cells are kept as they are (hint flag included); the rest get
    the solution letter flagged ``is_corrected``.
    """
    if not session.is_active:
        return session

    correct = 0
    total = 0
    rows: list[tuple[Optional[UserCell], ...]] = []
    for r, solution_row in enumerate(session.grid):
        row: list[Optional[UserCell]] = []
        for c, letter in enumerate(solution_row):
            cell = session.user_grid[r][c]
            if letter is None:
                row.append(cell)
                continue
            total += 1
            if cell is not None and cell.letter == letter:
                correct += 1
                row.append(cell)
            else:
                row.append(UserCell(letter, is_corrected=True))
        rows.append(tuple(row))

    return replace(
        session,
        state=SessionState.FINISHING,
        user_grid=tuple(rows),
        correct_letters=correct,
        total_letters=total,
    )


def complete_finish(session: SolvingSession) -> tuple[SolvingSession, SessionSummary]:
    """FINISHING -> FINISHED, with the summary to show."""
    if session.is_active:
        session = begin_finish(session)
    if session.state == SessionState.FINISHING:
        session = replace(session, state=SessionState.FINISHED)
    return session, build_summary(session)


def finish(session: SolvingSession) -> tuple[SolvingSession, SessionSummary]:
    """Both finishing steps at once, with no display delay."""
    return complete_finish(begin_finish(session))


def compute_penalty(session: SolvingSession) -> int:
    config = session.config
    return (
        config.initial_letter_cost * session.initial_hints_used
        + config.random_letter_cost * session.random_hints_used
        + config.extra_clue_cost * session.extra_clue_hints_used
    )


def final_score(session: SolvingSession) -> int:
    return session.correct_letters - session.penalty_points


def format_time(seconds: int) -> str:
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def build_summary(session: SolvingSession) -> SessionSummary:
    score = final_score(session)
    return SessionSummary(
        score=f"{score} punti ({session.correct_letters}/{session.total_letters} lettere)",
        time=format_time(session.elapsed_seconds),
        details=SummaryDetails(
            correct_letters=session.correct_letters,
            total_letters=session.total_letters,
            initial_hints_used=session.initial_hints_used,
            random_hints_used=session.random_hints_used,
            extra_clues_used=session.extra_clue_hints_used,
            penalty_points=session.penalty_points,
            final_score=score,
        ),
    )


def _with_cell(grid: UserGrid, row: int, col: int, cell: Optional[UserCell]) -> UserGrid:
    updated = list(grid[row])
    updated[col] = cell
    return grid[:row] + (tuple(updated),) + grid[row + 1:]
