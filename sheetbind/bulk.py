"""
RESPONSIBILITIES
- Drive an Adapter across a whole worksheet for bulk reads and writes.
- Prepare missing sheets and header rows before writing.
PROCESS OVERVIEW
1. read_all() binds the sheet and collects one record per non-blank data row.
2. write_all() drops every row after the header, then appends one row per record.
3. setup_sheet() creates the sheet and/or header row when absent.
4. setup_sheet_and_write_all() chains the two for first-time exports.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, MutableSequence
from typing import Any, List, Optional

from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from .adapter import Adapter
from .errors import RecordTypeError, ScanError, SheetNotFoundError, UnsupportedTypeError
from .header import HEADER_SEARCH_LIMIT, find_header
from .schema import RecordSchema, resolve_schema
from .sheets import append_row, find_sheet, truncate
from .utils.log import get_logger

logger = get_logger("bulk")


def _records(records: Any, operation: str) -> List[Any]:
    if isinstance(records, (str, bytes, Mapping)) or not isinstance(records, Iterable):
        raise RecordTypeError(
            f"{operation}: expected a sequence of records; was instead {type(records).__name__}"
        )
    return list(records)


def read_all(
    workbook: Workbook,
    sheet_name: str,
    schema: RecordSchema | type,
    into: Optional[MutableSequence[Any]] = None,
    *,
    header_search_limit: int = HEADER_SEARCH_LIMIT,
) -> MutableSequence[Any]:
    """Read every non-blank data row of *sheet_name* into records.

    Args:
        workbook: Loaded workbook.
        sheet_name: Sheet title, matched fuzzily.
        schema: Record schema, or a dataclass declared with ``column()``.
        into: Optional list to append to; a new list is returned otherwise.

    Returns:
        The list holding the records read, in row order.

    Raises:
        SheetNotFoundError: When no sheet title matches.
        HeaderIncompleteError: When declared columns are missing from the header.
        ScanError: When a cell cannot be coerced; rows read before it stay in *into*.
    """

    if into is None:
        into = []
    elif not isinstance(into, MutableSequence):
        raise RecordTypeError(
            f"read_all: expected a mutable sequence to read into; was instead {type(into).__name__}"
        )

    adapter = Adapter.for_sheet(
        workbook, sheet_name, schema, header_search_limit=header_search_limit
    )
    count = 0
    while adapter.next():
        try:
            into.append(adapter.read_new())
        except ScanError as exc:
            logger.error("Failed to read row", extra={"sheet": sheet_name, "row": adapter.row + 1})
            raise ScanError(f"read_all: {exc}") from exc
        count += 1

    logger.info("Sheet read", extra={"sheet": adapter.worksheet.title, "rows": count})
    return into


def write_all(
    workbook: Workbook,
    sheet_name: str,
    schema: RecordSchema | type,
    records: Iterable[Any],
    *,
    header_search_limit: int = HEADER_SEARCH_LIMIT,
) -> int:
    """Replace every data row of *sheet_name* with one row per record.

    Rows after the header are treated as disposable and removed first, so
    repeated writes do not accumulate. Returns the number of rows written.
    """

    items = _records(records, "write_all")
    adapter = Adapter.for_sheet(
        workbook, sheet_name, schema, header_search_limit=header_search_limit
    )
    removed = truncate(adapter.worksheet, adapter.header_row + 1)
    if removed:
        logger.info("Dropped stale rows", extra={"sheet": adapter.worksheet.title, "rows": removed})

    for position, record in enumerate(items, start=1):
        adapter.append()
        try:
            adapter.write(record)
        except (RecordTypeError, UnsupportedTypeError) as exc:
            logger.error(
                "Failed to write record",
                extra={"sheet": adapter.worksheet.title, "record": position},
            )
            raise type(exc)(
                f"write_all: couldn't write record {position} of {len(items)}: {exc}"
            ) from exc

    logger.info("Sheet written", extra={"sheet": adapter.worksheet.title, "rows": len(items)})
    return len(items)


def setup_sheet(workbook: Workbook, sheet_name: str, schema: RecordSchema | type) -> Worksheet:
    """Return the named sheet, creating it and its header row when absent."""

    resolved = resolve_schema(schema)
    try:
        worksheet = find_sheet(workbook, sheet_name)
    except SheetNotFoundError:
        worksheet = workbook.create_sheet(title=sheet_name)
        logger.info("Created sheet", extra={"sheet": sheet_name})

    names = resolved.names
    _, columns = find_header(worksheet, HEADER_SEARCH_LIMIT, names)
    if len(columns) == len(names):
        return worksheet

    append_row(worksheet, names)
    logger.info("Added header row", extra={"sheet": worksheet.title, "columns": names})
    return worksheet


def setup_sheet_and_write_all(
    workbook: Workbook,
    sheet_name: str,
    schema: RecordSchema | type,
    records: Iterable[Any],
) -> int:
    """Ensure the sheet and header exist, then :func:`write_all`."""

    items = _records(records, "setup_sheet_and_write_all")
    resolved = resolve_schema(schema)
    setup_sheet(workbook, sheet_name, resolved)
    return write_all(workbook, sheet_name, resolved, items)
