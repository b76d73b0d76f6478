"""Game controller: owns the current session, the tick timer and the callbacks.

Every event goes through one lock and swaps the session record wholesale, so
a tick can never interleave with a keystroke or a hint.
"""

from __future__ import annotations

import logging
import random
import threading
from collections.abc import Callable, Sequence

from models import ChemicalElement, Clue
from puzzle_generator import GenerationResult, GeneratorConfig, Puzzle, generate_crossword
from solving_session import (
    Move,
    SessionConfig,
    SessionState,
    SessionSummary,
    SolvingSession,
    begin_finish,
    complete_finish,
    has_extra_clue,
    input_letter,
    navigate,
    request_extra_clue,
    reveal_initial_letter,
    reveal_random_letter,
    set_focus,
    start_session,
    tick,
)

LOGGER = logging.getLogger(__name__)

SummaryCallback = Callable[[SessionSummary, Callable[[], None]], None]


class CrosswordGame:
    """Drive one solving session at a time over a fixed element dataset."""

    def __init__(
        self,
        elements: Sequence[ChemicalElement],
        on_summary: SummaryCallback | None = None,
        rng: random.Random | None = None,
        generator_config: GeneratorConfig | None = None,
        session_config: SessionConfig | None = None,
        start_timer: bool = True,
    ) -> None:
        self.elements = list(elements)
        self.on_summary = on_summary
        self.rng = rng or random.Random()
        self.generator_config = generator_config or GeneratorConfig()
        self.session_config = session_config or SessionConfig()
        self.start_timer = start_timer

        self._lock = threading.RLock()
        self._tick_timer: threading.Timer | None = None
        self._finish_timer: threading.Timer | None = None
        self.generation: GenerationResult | None = None
        self.session: SolvingSession | None = None
        self.new_game()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @property
    def puzzle(self) -> Puzzle:
        return self.generation.puzzle

    def new_game(self) -> SolvingSession:
        """Generate a fresh puzzle and replace the session with a new one."""
        with self._lock:
            self._cancel_timers()
            self.generation = generate_crossword(
                self.elements, self.rng, self.generator_config
            )
            self.session = start_session(
                self.puzzle.solution, self.puzzle.clues, self.session_config
            )
            LOGGER.info(
                "New game: %dx%d grid, %d clues%s",
                self.puzzle.rows, self.puzzle.cols, len(self.puzzle.clues),
                " (fallback)" if self.generation.used_fallback else "",
            )
            if self.start_timer:
                self._schedule_tick()
            return self.session

    restart = new_game

    def finish(self) -> SolvingSession:
        """Stop the clock, correct the grid, and emit the summary after the delay."""
        with self._lock:
            if not self.session.is_active:
                return self.session
            self._cancel_tick()
            self.session = begin_finish(self.session)
            delay = self.session_config.finish_delay_seconds
            if delay <= 0:
                self._complete_finish()
            else:
                self._finish_timer = threading.Timer(delay, self._complete_finish)
                self._finish_timer.daemon = True
                self._finish_timer.start()
            return self.session

    def close(self) -> None:
        with self._lock:
            self._cancel_timers()

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def type_letter(self, row: int, col: int, value: str) -> SolvingSession:
        return self._apply(lambda s: input_letter(s, row, col, value))

    def focus(self, row: int, col: int) -> SolvingSession:
        return self._apply(lambda s: set_focus(s, row, col))

    def move(self, move: Move) -> SolvingSession:
        return self._apply(lambda s: navigate(s, move))

    def initial_letter_hint(self) -> SolvingSession:
        return self._apply(lambda s: reveal_initial_letter(s, self.rng))

    def random_letter_hint(self) -> SolvingSession:
        return self._apply(lambda s: reveal_random_letter(s, self.rng))

    def extra_clue(self, clue: Clue) -> str | None:
        with self._lock:
            self.session, text = request_extra_clue(self.session, clue, self.rng)
            return text

    def can_request_extra_clue(self, clue: Clue) -> bool:
        with self._lock:
            return self.session.is_active and has_extra_clue(self.session, clue)

    def tick(self) -> SolvingSession:
        return self._apply(tick)

    @property
    def timer_running(self) -> bool:
        return self._tick_timer is not None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _apply(self, transition: Callable[[SolvingSession], SolvingSession]) -> SolvingSession:
        with self._lock:
            self.session = transition(self.session)
            return self.session

    def _schedule_tick(self) -> None:
        timer = threading.Timer(self.session_config.tick_seconds, self._on_tick)
        timer.daemon = True
        self._tick_timer = timer
        timer.start()

    def _on_tick(self) -> None:
        with self._lock:
            if self._tick_timer is not threading.current_thread() or not self.session.is_active:
                return
            self.session = tick(self.session)
            self._schedule_tick()

    def _complete_finish(self) -> None:
        with self._lock:
            self._finish_timer = None
            if self.session.state != SessionState.FINISHING:
                return
            self.session, summary = complete_finish(self.session)
            LOGGER.info("Session finished: %s in %s", summary.score, summary.time)
        if self.on_summary is not None:
            self.on_summary(summary, self.restart)

    def _cancel_tick(self) -> None:
        if self._tick_timer is not None:
            self._tick_timer.cancel()
            self._tick_timer = None

    def _cancel_timers(self) -> None:
        self._cancel_tick()
        if self._finish_timer is not None:
            self._finish_timer.cancel()
            self._finish_timer = None
