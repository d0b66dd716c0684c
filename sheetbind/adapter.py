"""
RESPONSIBILITIES
- Bind a record schema to the columns discovered in a worksheet's header row.
- Expose a forward-only cursor over data rows that reads into and writes from records.
PROCESS OVERVIEW
1. Adapter() runs header discovery and fails when any declared column is missing.
2. next() moves the cursor to the following non-blank row.
3. read()/read_new() scan the current row; write() renders a record into it.
4. append() adds a fresh row after the last one and moves the cursor onto it.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from .errors import HeaderIncompleteError, RecordTypeError, ScanError, UnsupportedTypeError
from .header import HEADER_SEARCH_LIMIT, HeaderMap, find_header, missing_columns
from .scan import Kind, scan_row
from .schema import RecordSchema, resolve_schema
from .sheets import append_row, cell, find_sheet, is_blank, row_count, row_texts
from .utils.log import get_logger
from .values import Enumerated, TextValue, format_float

logger = get_logger("adapter")


def render_text(value: Any) -> str:
    """Render a field value as cell text.

    Supported values are None, ``str``, ``float``, values offering ``enum()``
    and values implementing the ``TextValue`` contract. Everything else,
    including ``int`` and ``bool``, is rejected.
    """

    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, float):
        return format_float(value)
    if isinstance(value, Enumerated):
        return value.enum()
    if isinstance(value, TextValue):
        return str(value)
    raise UnsupportedTypeError(f"can't write field of type {type(value).__name__}")


class Adapter:
    """Stateful cursor pairing a record schema with a worksheet's columns."""

    def __init__(
        self,
        worksheet: Worksheet,
        schema: RecordSchema | type,
        *,
        header_search_limit: int = HEADER_SEARCH_LIMIT,
    ) -> None:
        self._schema = resolve_schema(schema)
        self._worksheet = worksheet

        names = self._schema.names
        header_row, columns = find_header(worksheet, header_search_limit, names)
        if len(columns) < len(names):
            raise HeaderIncompleteError(missing_columns(names, columns))

        self._columns: HeaderMap = dict(columns)
        self._width = max(self._columns.values())
        self._header_row = header_row
        self._row = header_row

        self._kinds: List[Optional[Kind]] = [None] * (self._width + 1)
        for col in self._schema.columns:
            self._kinds[self._columns[col.name]] = col.kind

        logger.debug(
            "Bound header",
            extra={"sheet": worksheet.title, "header_row": header_row, "columns": self._columns},
        )

    @classmethod
    def for_sheet(
        cls,
        workbook: Workbook,
        name: str,
        schema: RecordSchema | type,
        **kwargs: Any,
    ) -> "Adapter":
        """Locate the worksheet by fuzzy title and bind *schema* to it."""

        return cls(find_sheet(workbook, name), schema, **kwargs)

    @property
    def worksheet(self) -> Worksheet:
        return self._worksheet

    @property
    def schema(self) -> RecordSchema:
        return self._schema

    @property
    def columns(self) -> HeaderMap:
        return dict(self._columns)

    @property
    def header_row(self) -> int:
        return self._header_row

    @property
    def row(self) -> int:
        """Zero-based index of the row under the cursor."""

        return self._row

    @property
    def width(self) -> int:
        """Highest column index the schema touches."""

        return self._width

    def next(self) -> bool:
        """Advance to the next non-blank row; False when none remain."""

        total = row_count(self._worksheet)
        while self._row < total - 1:
            self._row += 1
            if not is_blank(self._worksheet, self._row):
                return True
        return False

    def append(self) -> int:
        """Append an empty row and move the cursor onto it."""

        self._row = append_row(self._worksheet)
        return self._row

    def _check(self, record: Any, operation: str) -> None:
        if not isinstance(record, self._schema.record_type):
            raise RecordTypeError(
                f"Adapter.{operation}: expected {self._schema.record_type.__name__}; "
                f"was instead {type(record).__name__}"
            )

    def _scan_current(self) -> Dict[str, Any]:
        try:
            values = scan_row(row_texts(self._worksheet, self._row), self._kinds)
        except ScanError as exc:
            raise ScanError(
                f"Adapter.read: couldn't read row {self._row + 1} of "
                f"{row_count(self._worksheet)}: {exc}"
            ) from exc
        return {col.field: values[self._columns[col.name]] for col in self._schema.columns}

    def read(self, record: Any) -> None:
        """Scan the current row into the bound fields of *record*."""

        self._check(record, "read")
        for field_name, value in self._scan_current().items():
            setattr(record, field_name, value)

    def read_new(self) -> Any:
        """Scan the current row into a freshly built record."""

        return self._schema.build(self._scan_current())

    def write(self, record: Any) -> None:
        """Render the bound fields of *record* into the current row."""

        self._check(record, "write")
        rendered: Dict[int, str] = {}
        for col in self._schema.columns:
            try:
                rendered[self._columns[col.name]] = render_text(getattr(record, col.field))
            except UnsupportedTypeError as exc:
                raise UnsupportedTypeError(f"Adapter.write: field {col.field!r}: {exc}") from exc
        for column_index in sorted(rendered):
            cell(self._worksheet, self._row, column_index).value = rendered[column_index]
