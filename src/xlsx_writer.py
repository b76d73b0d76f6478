"""Write the clues of a generated crossword to an XLSX file."""

from __future__ import annotations

import openpyxl
from openpyxl.styles import Font

from models import Clue

ACROSS_LABEL = "ORIZZONTALI"
DOWN_LABEL = "VERTICALI"


def write_clues_xlsx(
    across: list[Clue],
    down: list[Clue],
    output_path: str,
    unplaced: list[str] | None = None,
) -> None:
    """Write across and down clues to an Excel workbook.

    Numbering is embedded in the clue cell: '1. Clue text'.
    Answers are in column B, start cells (row, col) in column C.
    If *unplaced* is provided, a second sheet lists words that didn't fit.
    """
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Definizioni"

    header_font = Font(bold=True, size=12)
    row = 1

    for label, clues in ((ACROSS_LABEL, across), (DOWN_LABEL, down)):
        ws.cell(row=row, column=1, value=label).font = header_font
        row += 1
        for clue in clues:
            ws.cell(row=row, column=1, value=f"{clue.number}. {clue.text}")
            ws.cell(row=row, column=2, value=clue.answer)
            ws.cell(row=row, column=3, value=f"{clue.row},{clue.col}")
            row += 1
        # Blank separator
        row += 1

    ws.column_dimensions["A"].width = 70
    ws.column_dimensions["B"].width = 16
    ws.column_dimensions["C"].width = 8

    if unplaced:
        ws2 = wb.create_sheet(title="Non inseriti")
        ws2.cell(row=1, column=1, value="Parola").font = header_font
        for i, word in enumerate(unplaced, start=2):
            ws2.cell(row=i, column=1, value=word)
        ws2.column_dimensions["A"].width = 16

    wb.save(output_path)
