"""
RESPONSIBILITIES
- Typer CLI for inspecting and exporting spreadsheets bound through sheetbind.
PROCESS OVERVIEW
1. headers -> locate the header row for a list of expected column names.
2. dump -> read a sheet through a YAML binding file and emit CSV via pandas.
3. init-sheet -> create the bound sheet and header row when absent, then save.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, NoReturn, Optional

import typer
from openpyxl.utils import get_column_letter

from sheetbind.bulk import read_all, setup_sheet
from sheetbind.config import load_binding_config
from sheetbind.errors import SheetBindError
from sheetbind.frame import records_to_frame
from sheetbind.header import HEADER_SEARCH_LIMIT, find_header, missing_columns
from sheetbind.sheets import find_sheet
from sheetbind.utils.log import get_logger, set_level
from sheetbind.workbook import load_workbook, save_workbook

app = typer.Typer(help="Bind spreadsheet rows to typed records.")
logger = get_logger("cli")


def _fail(message: str) -> NoReturn:
    typer.echo(message, err=True)
    raise typer.Exit(code=1)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        help="Set logging level (e.g. DEBUG/INFO/WARNING).",
    ),
) -> None:
    """Configure global CLI behaviour before executing commands."""

    set_level(log_level.upper())


@app.command("headers")
def headers_command(
    path: Path = typer.Argument(..., help="Workbook to inspect."),
    sheet: str = typer.Option(..., "--sheet", help="Sheet name (matched case-insensitively)."),
    columns: List[str] = typer.Option(..., "--column", help="Expected column name; repeatable."),
    limit: int = typer.Option(HEADER_SEARCH_LIMIT, help="Number of leading rows to search."),
) -> None:
    """Report where the header row and each expected column are."""

    try:
        worksheet = find_sheet(load_workbook(path), sheet)
    except (FileNotFoundError, SheetBindError) as exc:
        _fail(str(exc))

    row, found = find_header(worksheet, limit, columns)
    if row < 0:
        _fail(f"no header row found in the first {limit + 1} rows of {worksheet.title!r}")

    typer.echo(f"header row: {row + 1}")
    for name in columns:
        if name in found:
            typer.echo(f"{name}: column {get_column_letter(found[name] + 1)}")

    missing = missing_columns(columns, found)
    if missing:
        _fail(f"missing columns: {', '.join(missing)}")


@app.command("dump")
def dump_command(
    path: Path = typer.Argument(..., help="Workbook to read."),
    binding: Path = typer.Argument(..., help="Binding YAML file."),
    out: Optional[Path] = typer.Option(None, "--out", help="Write CSV here instead of stdout."),
    display: bool = typer.Option(False, "--display", help="Use display text instead of codes."),
) -> None:
    """Read a bound sheet and print its records as CSV."""

    try:
        config = load_binding_config(binding)
        schema = config.to_schema()
        records = read_all(
            load_workbook(path),
            config.sheet,
            schema,
            header_search_limit=config.header_search_limit,
        )
    except (FileNotFoundError, SheetBindError) as exc:
        _fail(str(exc))

    frame = records_to_frame(records, schema, text="display" if display else "code")
    if out is None:
        typer.echo(frame.to_csv(index=False), nl=False)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(out, index=False)
    logger.info("CSV written", extra={"path": str(out), "rows": len(frame)})
    typer.echo(f"Wrote {len(frame)} rows to {out}")


@app.command("init-sheet")
def init_sheet_command(
    path: Path = typer.Argument(..., help="Workbook to create or update."),
    binding: Path = typer.Argument(..., help="Binding YAML file."),
) -> None:
    """Create the bound sheet and its header row if they are missing."""

    try:
        config = load_binding_config(binding)
        workbook = load_workbook(path, create=True)
        worksheet = setup_sheet(workbook, config.sheet, config.to_schema())
    except (FileNotFoundError, SheetBindError) as exc:
        _fail(str(exc))

    save_workbook(workbook, path)
    typer.echo(f"Sheet {worksheet.title!r} ready in {path}")


if __name__ == "__main__":  # pragma: no cover
    app()
