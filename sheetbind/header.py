"""Header row discovery."""

# Module responsibilities:
# - Match a row's cell text against expected column names using fuzzy equality.
# - Locate the header row within a bounded window, falling back to the best partial match.

from __future__ import annotations

from typing import Dict, Sequence, Tuple

from openpyxl.worksheet.worksheet import Worksheet

from .sheets import fuzzy, row_count, row_texts

HEADER_SEARCH_LIMIT = 10

HeaderMap = Dict[str, int]


def find_columns(texts: Sequence[str], names: Sequence[str]) -> HeaderMap:
    """Map each expected name to the index of the first cell matching it."""

    found: HeaderMap = {}
    for index, text in enumerate(texts):
        for name in names:
            if name in found:
                continue
            if fuzzy(text, name):
                found[name] = index
    return found


def find_header(
    worksheet: Worksheet,
    limit: int,
    names: Sequence[str],
) -> Tuple[int, HeaderMap]:
    """Find the header row among the first rows of *worksheet*.

    Rows ``0..min(limit, last_row)`` are searched. The first row matching every
    name wins. Otherwise the row matching the most names is returned (earliest
    row on ties) so callers can report exactly which names are missing; the row
    index is -1 when nothing matched at all.
    """

    limit = min(limit, row_count(worksheet) - 1)

    best_row = -1
    best_columns: HeaderMap = {}
    for index in range(limit + 1):
        columns = find_columns(row_texts(worksheet, index), names)
        if len(columns) == len(names):
            return index, columns
        if len(columns) > len(best_columns):
            best_row = index
            best_columns = columns
    return best_row, best_columns


def missing_columns(names: Sequence[str], columns: HeaderMap) -> list[str]:
    return [name for name in names if name not in columns]
