"""Shared fixtures: a small element dataset and hand-built sessions."""

from __future__ import annotations

import openpyxl
import pytest

from models import ELEMENT_HEADERS, ChemicalElement, Clue, Direction
from solving_session import SessionConfig, start_session

# (name, Z, symbol, discovery year, name origin)
_ELEMENT_ROWS = [
    ("Idrogeno", 1, "H", "1766", "dal greco 'generatore d'acqua'"),
    ("Elio", 2, "He", "1868", "dal greco helios, sole"),
    ("Litio", 3, "Li", "1817", "dal greco lithos, pietra"),
    ("Berillio", 4, "Be", "1798", "dal minerale berillo"),
    ("Boro", 5, "B", "1808", "dall'arabo buraq"),
    ("Carbonio", 6, "C", "", "dal latino carbo, carbone"),
    ("Azoto", 7, "N", "1772", "dal greco 'senza vita'"),
    ("Ossigeno", 8, "O", "1774", "dal greco 'generatore di acidi'"),
    ("Fluoro", 9, "F", "1886", "dal latino fluere, scorrere"),
    ("Neon", 10, "Ne", "1898", "dal greco neos, nuovo"),
    ("Sodio", 11, "Na", "1807", "dalla soda"),
    ("Magnesio", 12, "Mg", "1755", "dalla regione di Magnesia"),
    ("Alluminio", 13, "Al", "1825", "dal latino alumen"),
    ("Silicio", 14, "Si", "1824", "dal latino silex, selce"),
    ("Fosforo", 15, "P", "1669", "dal greco 'portatore di luce'"),
    ("Zolfo", 16, "S", "", "dal latino sulfur"),
    ("Cloro", 17, "Cl", "1774", "dal greco chloros, verde pallido"),
    ("Argon", 18, "Ar", "1894", "dal greco argos, inattivo"),
    ("Potassio", 19, "K", "1807", "dalla potassa"),
    ("Calcio", 20, "Ca", "1808", "dal latino calx, calce"),
]


def make_element(name: str, z: int = 0, symbol: str = "", year: str = "", origin: str = "",
                 **extra: str) -> ChemicalElement:
    return ChemicalElement(
        name=name,
        atomic_number=str(z) if z else "",
        symbol=symbol,
        discovery_year=year,
        name_origin=origin,
        **extra,
    )


@pytest.fixture
def elements() -> list[ChemicalElement]:
    """Twenty element records whose names all survive normalization."""
    return [make_element(*row) for row in _ELEMENT_ROWS]


def make_session(words: list[str], config: SessionConfig | None = None):
    """Lay *words* across on rows 0, 2, 4, ... and start a session on them."""
    width = max(len(w) for w in words)
    solution = []
    clues = []
    for i, word in enumerate(words):
        solution.append(list(word) + [None] * (width - len(word)))
        if i < len(words) - 1:
            solution.append([None] * width)
        clues.append(Clue(
            number=i + 1,
            direction=Direction.ACROSS,
            text=f"Elemento con numero atomico {i + 1}",
            answer=word,
            row=2 * i,
            col=0,
            element=make_element(word.title(), i + 1, word[:2].title(), "1800", "dal greco"),
        ))
    return start_session(solution, clues, config)


def write_dataset(path, records, title_row: bool = False) -> None:
    """Save *records* (header -> value dicts) as an XLSX dataset."""
    wb = openpyxl.Workbook()
    ws = wb.active
    if title_row:
        ws.append(["Tavola periodica"])
    headers = list(ELEMENT_HEADERS)
    ws.append(headers)
    for record in records:
        ws.append([record.get(h) for h in headers])
    wb.save(path)


@pytest.fixture
def dataset_records() -> list[dict]:
    return [
        {
            "Elemento": name,
            "Z": z,
            "Simbolo": symbol,
            "Anno di scoperta": year,
            "Origine del nome": origin,
        }
        for name, z, symbol, year, origin in _ELEMENT_ROWS
    ]


def assert_legal_layout(puzzle) -> None:
    """Crossing words agree and no word touches a non-crossing neighbour."""
    cover: dict[tuple[int, int], list] = {}
    for p in puzzle.placements:
        for (r, c), letter in zip(p.cells, p.word):
            assert puzzle.solution[r][c] == letter
            cover.setdefault((r, c), []).append(p)

    for p in puzzle.placements:
        dr, dc = p.direction.step
        pr, pc = dc, dr
        for r, c in p.cells:
            if len(cover[(r, c)]) > 1:
                continue
            for nr, nc in ((r - pr, c - pc), (r + pr, c + pc)):
                assert (nr, nc) not in cover, f"{p.word} touches a neighbour at {(nr, nc)}"
        before = (p.row - dr, p.col - dc)
        after = (p.row + dr * len(p.word), p.col + dc * len(p.word))
        assert before not in cover
        assert after not in cover
