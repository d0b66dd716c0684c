"""Worksheet helpers layered over openpyxl."""

# Module responsibilities:
# - Locate worksheets by fuzzy title and expose rows as zero-based sequences of cell text.
# - Pad rows with new cells that inherit the style of their left neighbour.
# - Append and truncate rows without relying on openpyxl's internal append cursor.

from __future__ import annotations

from copy import copy
from typing import Iterable, List

from openpyxl.cell.cell import Cell
from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from .errors import SheetNotFoundError


def fuzzy(a: str, b: str) -> bool:
    """Case- and surrounding-whitespace-insensitive equality."""

    return a.strip().lower() == b.strip().lower()


def find_sheet(workbook: Workbook, name: str) -> Worksheet:
    """Return the first worksheet whose title fuzzily matches *name*.

    Raises:
        SheetNotFoundError: When no title matches; lists every title seen.
    """

    found: List[str] = []
    for worksheet in workbook.worksheets:
        found.append(worksheet.title)
        if fuzzy(worksheet.title, name):
            return worksheet
    raise SheetNotFoundError(name, found)


def cell_text(value: object) -> str:
    if value is None:
        return ""
    return str(value)


def _row_values(worksheet: Worksheet, index: int) -> tuple[object, ...]:
    rows = worksheet.iter_rows(min_row=index + 1, max_row=index + 1, values_only=True)
    return next(rows, ())


def row_count(worksheet: Worksheet) -> int:
    """Number of rows; a worksheet holding one empty row counts as empty."""

    max_row = worksheet.max_row
    if max_row == 1 and all(cell_text(v) == "" for v in _row_values(worksheet, 0)):
        return 0
    return max_row


def row_texts(worksheet: Worksheet, index: int) -> List[str]:
    """Return the untrimmed text of every cell in the zero-based row *index*."""

    return [cell_text(value) for value in _row_values(worksheet, index)]


def row_width(worksheet: Worksheet, index: int) -> int:
    """Length of the row's cell sequence: one past the last non-empty cell."""

    texts = row_texts(worksheet, index)
    width = len(texts)
    while width and texts[width - 1] == "":
        width -= 1
    return width


def is_blank(worksheet: Worksheet, index: int) -> bool:
    return all(text == "" for text in row_texts(worksheet, index))


def copy_style(to: Cell, source: Cell) -> None:
    """Copy the presentation style of *source* onto *to*."""

    if not source.has_style:
        return
    to.font = copy(source.font)
    to.border = copy(source.border)
    to.fill = copy(source.fill)
    to.number_format = source.number_format
    to.protection = copy(source.protection)
    to.alignment = copy(source.alignment)


def row_extent(worksheet: Worksheet, index: int) -> int:
    """One past the last cell of the row holding a value or a style of its own.

    Empty unstyled cells are indistinguishable from absent ones, since openpyxl
    materialises them whenever a row is iterated.
    """

    row = index + 1
    extent = 0
    for column in range(1, worksheet.max_column + 1):
        existing = worksheet._cells.get((row, column))
        if existing is not None and (existing.value is not None or existing.has_style):
            extent = column
    return extent


def cell(worksheet: Worksheet, index: int, column: int) -> Cell:
    """Return the cell at zero-based (*index*, *column*), padding the row up to it.

    Every cell created past the end of the row copies the style of the cell
    immediately to its left; cells already in the row keep their own style.
    """

    row = index + 1
    width = max(row_extent(worksheet, index), 1)
    for position in range(width, column + 1):
        left = worksheet.cell(row=row, column=position)
        copy_style(worksheet.cell(row=row, column=position + 1), left)
    return worksheet.cell(row=row, column=column + 1)


def append_row(worksheet: Worksheet, values: Iterable[str] = ()) -> int:
    """Append a row after the last one and return its zero-based index."""

    index = row_count(worksheet)
    row = index + 1
    written = False
    for column, value in enumerate(values, start=1):
        worksheet.cell(row=row, column=column, value=value)
        written = True
    if not written:
        # an empty cell is enough to make the row count
        worksheet.cell(row=row, column=1)
    return index


def truncate(worksheet: Worksheet, keep: int) -> int:
    """Delete every row after the first *keep* rows; return how many were removed."""

    total = row_count(worksheet)
    if total <= keep:
        return 0
    worksheet.delete_rows(keep + 1, total - keep)
    return total - keep
