"""`sheetbind` binds spreadsheet rows to typed records and back."""

# Module responsibilities:
# - Re-export the binding engine, the value types and the bulk helpers so consumers have a stable API surface.
# - Provide the package version.

from __future__ import annotations

from .adapter import Adapter, render_text
from .bulk import read_all, setup_sheet, setup_sheet_and_write_all, write_all
from .errors import (
    ConfigError,
    HeaderIncompleteError,
    RecordTypeError,
    ScanError,
    SchemaError,
    SheetBindError,
    SheetNotFoundError,
    UnsupportedTypeError,
)
from .header import HEADER_SEARCH_LIMIT, find_columns, find_header
from .scan import Kind, Shape, scan_row, scan_text
from .schema import Column, RecordSchema, column
from .sheets import cell, find_sheet, fuzzy
from .values import Enumerated, Money, Months, Range, TextValue, Years, YesNo

__all__ = [
    "Adapter",
    "render_text",
    "read_all",
    "write_all",
    "setup_sheet",
    "setup_sheet_and_write_all",
    "SheetBindError",
    "ConfigError",
    "SchemaError",
    "SheetNotFoundError",
    "HeaderIncompleteError",
    "RecordTypeError",
    "ScanError",
    "UnsupportedTypeError",
    "HEADER_SEARCH_LIMIT",
    "find_columns",
    "find_header",
    "Kind",
    "Shape",
    "scan_row",
    "scan_text",
    "Column",
    "RecordSchema",
    "column",
    "cell",
    "find_sheet",
    "fuzzy",
    "TextValue",
    "Enumerated",
    "Money",
    "Years",
    "Months",
    "YesNo",
    "Range",
]

__version__ = "0.1.0"
