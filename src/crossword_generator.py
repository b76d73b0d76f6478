#!/usr/bin/env python3
"""CLI entry point: element dataset (XLSX) -> crossword PDF, clue sheet and SVGs."""

from __future__ import annotations

import argparse
import logging
import random
import sys
import time
from pathlib import Path

from models import CrosswordError

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


def _build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Generate a chemical-element crossword from an XLSX dataset."
    )
    p.add_argument("input", help="Path to the XLSX element dataset")
    p.add_argument(
        "output",
        nargs="?",
        default=None,
        help="Output PDF path (default: input with .pdf extension)",
    )
    p.add_argument("--title", default="CRUCIVERBA CHIMICO",
                   help='Title text (default: "CRUCIVERBA CHIMICO")')
    p.add_argument("--seed", type=int, default=None,
                   help="Random seed (default: random)")
    p.add_argument("--retries", type=int, default=50,
                   help="Generation attempts before the fallback (default: 50)")
    p.add_argument("--min-words", type=int, default=10,
                   help="Words an attempt must place to succeed (default: 10)")
    p.add_argument("-v", "--verbose", action="store_true",
                   help="Log every generation attempt")
    return p


def configure_logging(level: int = logging.INFO) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def main(argv: list[str] | None = None) -> None:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    seed = args.seed if args.seed is not None else random.randint(0, 2**31)
    t0 = time.time()

    try:
        _run(args, seed, t0)
    except CrosswordError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _run(args, seed: int, t0: float) -> None:
    from element_reader import read_elements
    from grid_builder import build_clue_lists
    from puzzle_generator import GeneratorConfig, generate_crossword

    input_path = Path(args.input)
    output_path = args.output or str(input_path.with_suffix(".pdf"))

    elements = read_elements(input_path)
    print(f"Read {len(elements)} element records", file=sys.stderr)

    config = GeneratorConfig(max_attempts=args.retries, min_words=args.min_words)
    result = generate_crossword(elements, random.Random(seed), config)
    puzzle = result.puzzle
    if not puzzle.placements:
        raise CrosswordError("No element name could be placed on the grid")

    across, down = build_clue_lists(puzzle.clues)
    _output_all(puzzle, across, down, args.title, output_path)

    elapsed = time.time() - t0
    note = " (fallback pool)" if result.used_fallback else ""
    print(
        f"Placed {puzzle.word_count} words on a {puzzle.rows}x{puzzle.cols} grid{note}, "
        f"attempts {result.attempts}, seed {seed}, time {elapsed:.1f}s",
        file=sys.stderr,
    )


def _output_all(puzzle, across, down, title: str, output_path: str) -> None:
    """Write PDF, clue XLSX, puzzle SVG and answer SVG into an 'output' folder."""
    from pdf_renderer import render_pdf
    from svg_renderer import render_answer_svg, render_puzzle_svg
    from xlsx_writer import write_clues_xlsx

    stem = Path(output_path).stem
    out_dir = Path(output_path).parent / "output"
    out_dir.mkdir(exist_ok=True)

    pdf_path = str(out_dir / f"{stem}.pdf")
    xlsx_path = str(out_dir / f"{stem}_definizioni.xlsx")
    puzzle_svg_path = str(out_dir / f"{stem}_puzzle.svg")
    answer_svg_path = str(out_dir / f"{stem}_soluzione.svg")

    render_pdf(puzzle.grid, across, down, title, pdf_path)
    write_clues_xlsx(across, down, xlsx_path, unplaced=puzzle.unplaced)
    render_puzzle_svg(puzzle.grid, puzzle_svg_path)
    render_answer_svg(puzzle.grid, answer_svg_path)

    for path in (pdf_path, xlsx_path, puzzle_svg_path, answer_svg_path):
        print(f"Output: {path}", file=sys.stderr)


if __name__ == "__main__":
    main()
