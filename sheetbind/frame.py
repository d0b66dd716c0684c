"""Export bound records to pandas."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

import pandas as pd

from .adapter import render_text
from .schema import RecordSchema, resolve_schema
from .values import TextValue, format_float

TEXT_MODES = ("code", "display")


def _code_text(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float)):
        return value
    if isinstance(value, TextValue):
        return value.code()
    return render_text(value)


def records_to_frame(
    records: Iterable[Any],
    schema: RecordSchema | type,
    *,
    text: str = "code",
) -> pd.DataFrame:
    """Build a DataFrame with one column per declared column name.

    ``text="code"`` renders values through ``code()`` and keeps plain numbers
    as numbers; ``text="display"`` uses the same rendering as sheet writes.
    Missing values stay ``None``.
    """

    if text not in TEXT_MODES:
        raise ValueError(f"text must be one of {', '.join(TEXT_MODES)}")
    resolved = resolve_schema(schema)

    rows: List[Dict[str, Any]] = []
    for record in records:
        row: Dict[str, Any] = {}
        for col in resolved.columns:
            value = getattr(record, col.field)
            if text == "code":
                row[col.name] = _code_text(value)
            elif value is None:
                row[col.name] = None
            elif isinstance(value, (int, float)) and not isinstance(value, bool):
                row[col.name] = format_float(value) if isinstance(value, float) else str(value)
            else:
                row[col.name] = render_text(value)
        rows.append(row)
    return pd.DataFrame(rows, columns=resolved.names)
