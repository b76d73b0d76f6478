"""Data models for the chemical-element crossword."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class CellType(Enum):
    BLACK = "BLACK"
    WHITE = "WHITE"


class Direction(Enum):
    ACROSS = "ACROSS"
    DOWN = "DOWN"

    @property
    def opposite(self) -> Direction:
        return Direction.DOWN if self is Direction.ACROSS else Direction.ACROSS

    @property
    def step(self) -> tuple[int, int]:
        """(dr, dc) for one letter along this direction."""
        return (0, 1) if self is Direction.ACROSS else (1, 0)


# Dataset column header -> ChemicalElement field
ELEMENT_HEADERS: dict[str, str] = {
    "Elemento": "name",
    "Z": "atomic_number",
    "Simbolo": "symbol",
    "Anno di scoperta": "discovery_year",
    "Origine del nome": "name_origin",
    "Caratteristiche chimiche": "chemical_traits",
    "Dove si trova e diffusione in natura": "occurrence",
    "Utilizzo da parte dell'industria": "industrial_use",
    "Curiosità legate a come sono stati usati o considerati nel corso della storia": "historical_trivia",
}


@dataclass(frozen=True)
class ChemicalElement:
    """One record of the element dataset. Text fields may be empty."""

    name: str
    atomic_number: str = ""
    symbol: str = ""
    discovery_year: str = ""
    name_origin: str = ""
    chemical_traits: str = ""
    occurrence: str = ""
    industrial_use: str = ""
    historical_trivia: str = ""

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> ChemicalElement:
        """Build from a mapping keyed by dataset headers or by field names."""
        values: dict[str, str] = {}
        for key, raw in record.items():
            name = ELEMENT_HEADERS.get(key, key)
            if name not in cls.__dataclass_fields__:
                continue
            values[name] = _as_text(raw)
        if "name" not in values:
            raise CrosswordError(f"Element record without a name: {dict(record)!r}")
        return cls(**values)


@dataclass(frozen=True)
class Candidate:
    """A normalized word ready for placement."""

    word: str  # uppercase, A-Z only
    clue_text: str
    element: ChemicalElement | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Placement(Candidate):
    """A Candidate that has been assigned a position on the grid."""

    row: int = 0
    col: int = 0
    direction: Direction = Direction.ACROSS

    @property
    def cells(self) -> list[tuple[int, int]]:
        dr, dc = self.direction.step
        return [(self.row + dr * i, self.col + dc * i) for i in range(len(self.word))]


@dataclass(frozen=True)
class Clue:
    """A numbered clue as shown to the solver."""

    number: int
    direction: Direction
    text: str
    answer: str
    row: int
    col: int
    element: ChemicalElement | None = field(default=None, compare=False, repr=False)

    @property
    def key(self) -> tuple[int, str]:
        return (self.number, self.direction.value)


@dataclass
class Cell:
    """A single cell of the display grid."""

    cell_type: CellType = CellType.BLACK
    letter: str | None = None
    number: int | None = None


@dataclass
class Grid:
    """A rows x cols display grid of Cell objects."""

    rows: int
    cols: int
    cells: list[list[Cell]] = field(default_factory=list)

    @classmethod
    def create(cls, rows: int, cols: int | None = None) -> Grid:
        """Create a grid of all-BLACK cells."""
        cols = rows if cols is None else cols
        cells = [[Cell() for _ in range(cols)] for _ in range(rows)]
        return cls(rows=rows, cols=cols, cells=cells)


@dataclass(frozen=True)
class UserCell:
    """What the solver sees in one cell."""

    letter: str
    is_hint: bool = False
    is_corrected: bool = False


class CrosswordError(Exception):
    """Fatal error while loading data or building a crossword."""


class DatasetError(CrosswordError):
    """The element dataset is missing, unreadable or empty."""


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()
