"""Tests for svg_renderer.py."""

import os
import random
import tempfile
import xml.etree.ElementTree as ET

from grid_builder import build_grid, grid_from_placements, number_clues
from models import Direction, Placement
from solving_session import begin_finish, input_letter, reveal_initial_letter, start_session
from svg_renderer import render_answer_svg, render_puzzle_svg, render_session_svg, render_svg

NS = {"svg": "http://www.w3.org/2000/svg"}


def _make_simple_puzzle():
    """BORO across and BERILLIO down sharing the B: an 8x4 grid."""
    placed = [
        Placement(word="BORO", clue_text="Il suo simbolo è B", row=0, col=0,
                  direction=Direction.ACROSS),
        Placement(word="BERILLIO", clue_text="Scoperto nel 1798", row=0, col=0,
                  direction=Direction.DOWN),
    ]
    solution = grid_from_placements(placed, 8, 4)
    clues = number_clues(placed)
    return solution, clues, build_grid(solution, clues)


def _render(draw):
    with tempfile.NamedTemporaryFile(suffix=".svg", delete=False) as f:
        path = f.name
    try:
        draw(path)
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    finally:
        os.unlink(path)


def _texts(content):
    return [t.text for t in ET.fromstring(content).findall(".//svg:text", NS)]


class TestRenderSvg:
    def test_creates_valid_svg(self):
        _, _, grid = _make_simple_puzzle()
        root = ET.fromstring(_render(lambda p: render_svg(grid, p)))
        assert root.tag == "{http://www.w3.org/2000/svg}svg"

    def test_rectangular_dimensions(self):
        _, _, grid = _make_simple_puzzle()
        root = ET.fromstring(_render(lambda p: render_svg(grid, p, cell_size=24.0)))
        assert root.get("width") == str(24.0 * 4)
        assert root.get("height") == str(24.0 * 8)

    def test_puzzle_has_no_letters(self):
        _, _, grid = _make_simple_puzzle()
        for text in _texts(_render(lambda p: render_puzzle_svg(grid, p))):
            assert text.isdigit(), f"Unexpected text: {text}"

    def test_answer_has_letters(self):
        _, _, grid = _make_simple_puzzle()
        content = _render(lambda p: render_answer_svg(grid, p))
        for letter in "BORELI":
            assert f">{letter}<" in content

    def test_cells_and_border(self):
        _, _, grid = _make_simple_puzzle()
        content = _render(lambda p: render_svg(grid, p))
        assert 'fill="black"' in content
        assert 'fill="white"' in content
        assert 'stroke-width="1.5"' in content

    def test_shared_start_number(self):
        _, _, grid = _make_simple_puzzle()
        numbers = [t for t in _texts(_render(lambda p: render_svg(grid, p))) if t.isdigit()]
        assert numbers == ["1"]


class TestRenderSessionSvg:
    def test_user_letters_only(self):
        solution, clues, grid = _make_simple_puzzle()
        session = input_letter(start_session(solution, clues), 0, 1, "O")
        content = _render(lambda p: render_session_svg(grid, session, p))
        letters = [t for t in _texts(content) if not t.isdigit()]
        assert letters == ["O"]

    def test_hint_and_corrected_tints(self):
        solution, clues, grid = _make_simple_puzzle()
        session = reveal_initial_letter(start_session(solution, clues), random.Random(0))
        content = _render(lambda p: render_session_svg(grid, session, p))
        assert 'fill="#c7d2fe"' in content
        assert 'fill="#fecaca"' not in content

        finished = begin_finish(session)
        content = _render(lambda p: render_session_svg(grid, finished, p))
        assert 'fill="#fecaca"' in content
        assert ">R<" in content
