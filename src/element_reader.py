"""Read chemical element records from an XLSX workbook."""

from __future__ import annotations

import sys
from pathlib import Path
from zipfile import BadZipFile

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from models import ELEMENT_HEADERS, ChemicalElement, DatasetError

NAME_HEADER = "Elemento"


def read_elements(path: str | Path) -> list[ChemicalElement]:
    """Open *path*, find the header row, map columns by name, return records."""
    path = Path(path)
    if not path.exists():
        raise DatasetError(f"File not found: {path}")

    try:
        wb = openpyxl.load_workbook(path, read_only=True, data_only=True)
    except (InvalidFileException, BadZipFile, KeyError, OSError) as exc:
        raise DatasetError(f"Cannot open workbook {path}: {exc}") from exc

    try:
        ws = wb.active
        header_row, columns = _detect_header_row(ws)
        elements: list[ChemicalElement] = []
        skipped = 0
        for row in ws.iter_rows(min_row=header_row + 1, values_only=True):
            record = {
                header: row[col] for header, col in columns.items() if col < len(row)
            }
            name = record.get(NAME_HEADER)
            if name is None or not str(name).strip():
                if any(v is not None for v in row):
                    skipped += 1
                continue
            elements.append(ChemicalElement.from_record(record))
    finally:
        wb.close()

    if skipped:
        print(f"Warning: skipped {skipped} row(s) without an element name", file=sys.stderr)
    if not elements:
        raise DatasetError(f"No element records in {path}")
    return elements


def _detect_header_row(sheet) -> tuple[int, dict[str, int]]:
    """Return the 1-based header row and a header -> column index map.

    The header row is the first of the top 20 rows that contains
    ``Elemento``. Unknown headers are ignored.
    """
    for index, row in enumerate(
        sheet.iter_rows(min_row=1, max_row=20, values_only=True), start=1
    ):
        labels = [str(v).strip() if v is not None else "" for v in row]
        if NAME_HEADER not in labels:
            continue
        columns = {
            label: col for col, label in enumerate(labels) if label in ELEMENT_HEADERS
        }
        missing = sorted(set(ELEMENT_HEADERS) - set(columns))
        if missing:
            print(
                f"Warning: missing columns {', '.join(missing)}; "
                f"clues from those attributes are unavailable",
                file=sys.stderr,
            )
        return index, columns
    raise DatasetError(f"No header row with '{NAME_HEADER}' in the first 20 rows")
