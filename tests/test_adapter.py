"""Unit tests for the record adapter cursor."""

# Module responsibilities:
# - Validate header binding, blank-row skipping and cursor bounds.
# - Assert read/write conversions and the closed set of writable field types.

from __future__ import annotations

from dataclasses import dataclass

import pytest
from openpyxl.styles import Font

from conftest import Loan, build_workbook
from sheetbind.adapter import Adapter, render_text
from sheetbind.errors import (
    HeaderIncompleteError,
    RecordTypeError,
    ScanError,
    SheetNotFoundError,
    UnsupportedTypeError,
)
from sheetbind.schema import column
from sheetbind.sheets import row_texts
from sheetbind.values import Money, Months, Range, Years, YesNo


def test_adapter_binds_reordered_header(loans_workbook) -> None:
    adapter = Adapter.for_sheet(loans_workbook, "loans", Loan)

    assert adapter.header_row == 2
    assert adapter.row == 2
    assert adapter.columns == {
        "Approved": 0,
        "Loan Amount": 1,
        "Borrower": 2,
        "Term": 3,
        "Rate": 4,
        "Grace Period": 5,
    }
    assert adapter.width == 5


def test_adapter_reports_every_missing_column() -> None:
    workbook = build_workbook([["Borrower", "Term"], ["Alice", "5"]])

    with pytest.raises(HeaderIncompleteError) as excinfo:
        Adapter(workbook.active, Loan)

    assert excinfo.value.missing == ["Loan Amount", "Grace Period", "Approved", "Rate"]


def test_adapter_for_missing_sheet(loans_workbook) -> None:
    with pytest.raises(SheetNotFoundError):
        Adapter.for_sheet(loans_workbook, "Payments", Loan)


def test_next_skips_blank_rows_and_reads_records(loans_workbook) -> None:
    adapter = Adapter.for_sheet(loans_workbook, "Loans", Loan)

    assert adapter.next()
    first = Loan()
    adapter.read(first)
    assert first == Loan(
        borrower="Alice",
        amount=Money(1234.5),
        term=Years(5),
        grace=Months(6),
        approved=YesNo(True),
        rate=0.0725,
    )

    assert adapter.next()
    assert adapter.row == 5
    second = adapter.read_new()
    assert second.borrower == "Bob"
    assert second.rate is None
    assert second.grace is None

    assert adapter.next()
    assert adapter.row == 7
    third = adapter.read_new()
    assert third.amount == Money(0.0)
    assert third.term == Years(3)
    assert third.grace == Months(0)

    assert not adapter.next()
    assert not adapter.next()


def test_read_keeps_unbound_fields(loans_workbook) -> None:
    adapter = Adapter.for_sheet(loans_workbook, "Loans", Loan)
    adapter.next()
    record = Loan(notes="keep me")

    adapter.read(record)

    assert record.notes == "keep me"


def test_next_reports_no_rows_when_only_blank_rows_remain() -> None:
    workbook = build_workbook([["Borrower"], ["", ""], [None], ["  "]])
    worksheet = workbook.active

    @dataclass
    class Name:
        borrower: str = column("Borrower", default="")

    adapter = Adapter(worksheet, Name)

    assert adapter.next()
    assert adapter.row == 3
    assert adapter.read_new() == Name(borrower="")
    assert not adapter.next()


def test_long_blank_runs_do_not_recurse() -> None:
    rows = [["Borrower"]] + [[""]] * 5000 + [["Zed"]]

    @dataclass
    class Name:
        borrower: str = column("Borrower", default="")

    adapter = Adapter(build_workbook(rows).active, Name)

    assert adapter.next()
    assert adapter.read_new() == Name(borrower="Zed")


def test_read_rejects_foreign_record(loans_workbook) -> None:
    adapter = Adapter.for_sheet(loans_workbook, "Loans", Loan)
    adapter.next()

    with pytest.raises(RecordTypeError, match="expected Loan"):
        adapter.read(object())


def test_read_failure_names_row_and_total() -> None:
    workbook = build_workbook(
        [
            ["Borrower", "Loan Amount", "Term", "Grace Period", "Approved", "Rate"],
            ["Alice", "1", "5", "", "perhaps", ""],
        ]
    )
    adapter = Adapter(workbook.active, Loan)
    adapter.next()

    with pytest.raises(ScanError, match="row 2 of 2") as excinfo:
        adapter.read_new()

    assert "YesNo" in str(excinfo.value)


def test_write_renders_each_field_type(loans_workbook) -> None:
    adapter = Adapter.for_sheet(loans_workbook, "Loans", Loan)
    adapter.next()

    adapter.write(
        Loan(
            borrower="Dora",
            amount=Money(1234.5),
            term=Years(5),
            grace=None,
            approved=YesNo(False),
            rate=0.05,
        )
    )

    assert row_texts(adapter.worksheet, adapter.row) == [
        "no",
        "$1234.50",
        "Dora",
        "5-years",
        "0.05",
        "",
        "first",
    ]


def test_append_moves_cursor_to_new_row(loans_workbook) -> None:
    adapter = Adapter.for_sheet(loans_workbook, "Loans", Loan)

    index = adapter.append()
    adapter.write(Loan(borrower="Eve", rate=1.0))

    assert index == 8
    assert adapter.row == 8
    assert row_texts(adapter.worksheet, 8)[:5] == ["no", "$0.00", "Eve", "0-years", "1"]


def test_written_cells_inherit_left_neighbour_style() -> None:
    @dataclass
    class Short:
        borrower: str = column("Borrower", default="")
        amount: Money = column("Loan Amount", default_factory=Money)
        term: Years = column("Term", default_factory=Years)

    workbook = build_workbook([["Borrower", "Loan Amount", "Term"], ["Old"]])
    worksheet = workbook.active
    worksheet["A2"].font = Font(italic=True)

    adapter = Adapter(worksheet, Short)
    assert adapter.next()
    adapter.write(Short(borrower="New", amount=Money(5.0), term=Years(1)))

    assert worksheet["B2"].value == "$5.00"
    assert worksheet["B2"].font.italic
    assert worksheet["C2"].font.italic


def test_write_rejects_types_outside_the_closed_set(loans_workbook) -> None:
    adapter = Adapter.for_sheet(loans_workbook, "Loans", Loan)
    adapter.next()
    record = Loan(borrower="Zoe")
    record.rate = 3

    with pytest.raises(UnsupportedTypeError, match="'rate'"):
        adapter.write(record)


def test_write_rejects_foreign_record(loans_workbook) -> None:
    adapter = Adapter.for_sheet(loans_workbook, "Loans", Loan)

    with pytest.raises(RecordTypeError):
        adapter.write({"borrower": "Zoe"})


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, ""),
        ("text", "text"),
        (2.5, "2.5"),
        (10.0, "10"),
        (Years(2), "2-years"),
        (Months(3), "3-months"),
        (Money(7), "$7.00"),
        (YesNo(True), "yes"),
        (Range(1, 4), "1-4"),
    ],
)
def test_render_text(value: object, expected: str) -> None:
    assert render_text(value) == expected


@pytest.mark.parametrize("value", [1, True, b"bytes", [1]])
def test_render_text_rejects_other_values(value: object) -> None:
    with pytest.raises(UnsupportedTypeError):
        render_text(value)
