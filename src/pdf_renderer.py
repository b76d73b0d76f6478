"""Render a crossword to a printable PDF using ReportLab.

Page 1: title banner, grid, and all clues flowing through columns below it.
Page 2: answer key.
"""

from __future__ import annotations

from dataclasses import dataclass
from xml.sax.saxutils import escape

from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.platypus import Paragraph

from models import CellType, Clue, Grid

PAGE_W, PAGE_H = A4  # 595.27 x 841.89
MARGIN = 36
SECTION_HEADER_H = 14.0
ACROSS_LABEL = "ORIZZONTALI"
DOWN_LABEL = "VERTICALI"


@dataclass
class LayoutParams:
    """Page geometry for one render; positions are derived, sizes are tunable."""

    page_w: float = PAGE_W
    page_h: float = PAGE_H
    margin: float = MARGIN
    usable_w: float = PAGE_W - 2 * MARGIN

    rows: int = 15
    cols: int = 15
    cell_size: float = 24.0
    grid_x: float = 0.0
    grid_y: float = 0.0  # top of grid in page coords

    banner_h: float = 28.0
    banner_y: float = 0.0

    clue_font_size: float = 9.0
    clue_leading: float = 10.5
    space_after: float = 1.5
    number_font_size: float = 6.0

    clue_zone_y: float = 0.0  # top of clue area
    clue_cols: int = 2
    clue_gutter: float = 12.0
    clue_col_w: float = 0.0

    title: str = "CRUCIVERBA CHIMICO"


def render_pdf(
    grid: Grid,
    across: list[Clue],
    down: list[Clue],
    title: str,
    output_path: str,
) -> None:
    """Compute layout, shrink until the clues fit, draw puzzle + answer key."""
    from reportlab.pdfgen.canvas import Canvas

    layout = _compute_layout(grid, across, down, title)
    layout = _adaptive_fit(across, down, layout)

    c = Canvas(output_path, pagesize=A4)

    _draw_title_banner(c, layout)
    _draw_grid(c, grid, layout, show_answers=False)
    _draw_clue_zone(c, across, down, layout)
    c.showPage()

    _draw_answer_key_page(c, grid, layout)
    c.showPage()

    c.save()


def _compute_layout(
    grid: Grid, across: list[Clue], down: list[Clue], title: str
) -> LayoutParams:
    lp = LayoutParams(rows=grid.rows, cols=grid.cols, title=title)

    span = max(grid.rows, grid.cols)
    if span <= 15:
        lp.cell_size = 24.0
        lp.number_font_size = 8.0
    elif span <= 19:
        lp.cell_size = 21.0
        lp.number_font_size = 7.0
    else:
        lp.cell_size = 17.0
        lp.number_font_size = 6.0

    lp.clue_cols = 2 if len(across) + len(down) < 16 else 3
    _recompute_positions(lp)
    return lp


def _recompute_positions(lp: LayoutParams) -> None:
    """Place banner, grid and clue zone top-down from the current sizes."""
    lp.banner_y = lp.page_h - lp.margin - lp.banner_h
    lp.grid_x = (lp.page_w - lp.cell_size * lp.cols) / 2
    lp.grid_y = lp.banner_y - 8
    lp.clue_zone_y = lp.grid_y - lp.cell_size * lp.rows - 12

    total_gutter = lp.clue_gutter * (lp.clue_cols - 1)
    lp.clue_col_w = (lp.usable_w - total_gutter) / lp.clue_cols


def _adaptive_fit(
    across: list[Clue], down: list[Clue], layout: LayoutParams
) -> LayoutParams:
    """Tighten the layout one step at a time until page 1 holds every clue."""
    for _ in range(16):
        if _content_fits(across, down, layout):
            return layout

        if layout.clue_font_size > 6.0:
            layout.clue_font_size -= 0.5
            layout.clue_leading = layout.clue_font_size + 1.5
            continue

        if layout.clue_cols < 4:
            layout.clue_cols += 1
            _recompute_positions(layout)
            continue

        if layout.cell_size > 12:
            layout.cell_size -= 1
            _recompute_positions(layout)
            continue

        break

    return layout


def _content_fits(across: list[Clue], down: list[Clue], layout: LayoutParams) -> bool:
    columns = _distribute(_render_items(across, down, layout), layout)
    tallest = max((sum(h for _, _, h in col) for col in columns), default=0.0)
    return tallest <= layout.clue_zone_y - layout.margin


def _clue_style(layout: LayoutParams) -> ParagraphStyle:
    return ParagraphStyle(
        "ClueStyle",
        fontName="Helvetica",
        fontSize=layout.clue_font_size,
        leading=layout.clue_leading,
        spaceAfter=layout.space_after,
    )


def _clue_markup(clue: Clue) -> str:
    """Bold number, then the escaped sentence."""
    return f"<b>{clue.number}.</b> {escape(clue.text)}"


def _render_items(
    across: list[Clue], down: list[Clue], layout: LayoutParams
) -> list[tuple[str, str, float]]:
    """(kind, content, height) for both section headers and every clue."""
    style = _clue_style(layout)
    items: list[tuple[str, str, float]] = []
    for label, clues in ((ACROSS_LABEL, across), (DOWN_LABEL, down)):
        items.append(("header", label, SECTION_HEADER_H + 4))
        for clue in clues:
            markup = _clue_markup(clue)
            _, h = Paragraph(markup, style).wrap(layout.clue_col_w, 10000)
            items.append(("clue", markup, h + style.spaceAfter))
    return items


def _distribute(
    items: list[tuple[str, str, float]], layout: LayoutParams
) -> list[list[tuple[str, str, float]]]:
    """Flow items into balanced columns; a header never ends a column."""
    target = sum(h for _, _, h in items) / layout.clue_cols
    columns: list[list[tuple[str, str, float]]] = [[] for _ in range(layout.clue_cols)]
    heights = [0.0] * layout.clue_cols
    col_idx = 0

    for item in items:
        h = item[2]
        if (col_idx < layout.clue_cols - 1
                and heights[col_idx] > 0
                and heights[col_idx] + h > target * 1.05):
            stray = None
            if columns[col_idx][-1][0] == "header":
                stray = columns[col_idx].pop()
                heights[col_idx] -= stray[2]
            col_idx += 1
            if stray is not None:
                columns[col_idx].append(stray)
                heights[col_idx] += stray[2]
        columns[col_idx].append(item)
        heights[col_idx] += h

    return columns


# ─── Drawing functions ──────────────────────────────────────────────────────


def _draw_title_banner(c, layout: LayoutParams) -> None:
    """Title in white on a full-width black band."""
    x = layout.margin
    y = layout.banner_y
    w = layout.usable_w
    h = layout.banner_h

    c.setFillColorRGB(0, 0, 0)
    c.rect(x, y, w, h, fill=1, stroke=0)

    c.setFillColorRGB(1, 1, 1)
    c.setFont("Helvetica-Bold", 16)
    text_w = stringWidth(layout.title, "Helvetica-Bold", 16)
    c.drawString(x + (w - text_w) / 2, y + (h - 16) / 2 + 2, layout.title)


def _draw_grid(c, grid: Grid, layout: LayoutParams, show_answers: bool) -> None:
    """Cells, start numbers and, on the answer key, the letters."""
    x0 = layout.grid_x
    y0 = layout.grid_y
    cs = layout.cell_size

    for r in range(grid.rows):
        for col in range(grid.cols):
            cell = grid.cells[r][col]
            cx = x0 + col * cs
            cy = y0 - (r + 1) * cs

            if cell.cell_type == CellType.BLACK:
                c.setFillColorRGB(0, 0, 0)
                c.rect(cx, cy, cs, cs, fill=1, stroke=0)
                continue

            c.setFillColorRGB(1, 1, 1)
            c.setStrokeColorRGB(0, 0, 0)
            c.setLineWidth(0.5)
            c.rect(cx, cy, cs, cs, fill=1, stroke=1)

            if cell.number is not None:
                c.setFillColorRGB(0, 0, 0)
                c.setFont("Helvetica-Bold", layout.number_font_size)
                c.drawString(cx + 1.5, cy + cs - layout.number_font_size - 1, str(cell.number))

            if show_answers and cell.letter:
                c.setFillColorRGB(0, 0, 0)
                font_size = cs * 0.45
                c.setFont("Helvetica", font_size)
                lw = stringWidth(cell.letter, "Helvetica", font_size)
                c.drawString(cx + cs * 0.55 - lw / 2, cy + cs * 0.42 - font_size / 2, cell.letter)

    c.setStrokeColorRGB(0, 0, 0)
    c.setLineWidth(1.5)
    c.rect(x0, y0 - grid.rows * cs, grid.cols * cs, grid.rows * cs, fill=0, stroke=1)


def _draw_clue_zone(c, across: list[Clue], down: list[Clue], layout: LayoutParams) -> None:
    style = _clue_style(layout)
    columns = _distribute(_render_items(across, down, layout), layout)

    for i, col_items in enumerate(columns):
        col_x = layout.margin + i * (layout.clue_col_w + layout.clue_gutter)
        current_y = layout.clue_zone_y
        for kind, content, h in col_items:
            if kind == "header":
                _draw_section_header(c, content, col_x, current_y, layout.clue_col_w)
            else:
                p = Paragraph(content, style)
                p.wrap(layout.clue_col_w, 10000)
                p.drawOn(c, col_x, current_y - h)
            current_y -= h


def _draw_section_header(c, text: str, x: float, y: float, width: float) -> None:
    """ORIZZONTALI / VERTICALI label on a black strip."""
    h = SECTION_HEADER_H
    c.setFillColorRGB(0, 0, 0)
    c.rect(x, y - h, width, h, fill=1, stroke=0)

    c.setFillColorRGB(1, 1, 1)
    c.setFont("Helvetica-Bold", 9)
    c.drawString(x + 4, y - h + 3.5, text)


def _draw_answer_key_page(c, grid: Grid, layout: LayoutParams) -> None:
    """Second page: SOLUZIONE banner above the filled grid."""
    ak_layout = LayoutParams(
        rows=layout.rows,
        cols=layout.cols,
        cell_size=layout.cell_size,
        number_font_size=layout.number_font_size,
        title="SOLUZIONE",
    )
    _recompute_positions(ak_layout)
    ak_layout.grid_y = ak_layout.banner_y - 20

    _draw_title_banner(c, ak_layout)
    _draw_grid(c, grid, ak_layout, show_answers=True)
