from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Sequence

import pytest
from openpyxl import Workbook

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sheetbind import Money, Months, Years, YesNo, column


@dataclass
class Loan:
    borrower: str = column("Borrower", default="")
    amount: Money = column("Loan Amount", default_factory=Money)
    term: Years = column("Term", default_factory=Years)
    grace: Optional[Months] = column("Grace Period", default=None)
    approved: YesNo = column("Approved", default_factory=YesNo)
    rate: Optional[float] = column("Rate", default=None)
    notes: str = ""


LOAN_HEADER = ["Borrower", "Loan Amount", "Term", "Grace Period", "Approved", "Rate"]


def build_workbook(rows: Iterable[Sequence[object]], title: str = "Loans") -> Workbook:
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = title
    for row in rows:
        worksheet.append(list(row))
    return workbook


@pytest.fixture()
def loans_workbook() -> Workbook:
    """Messy loan sheet: title row, blank spacer, reordered header, blank data rows."""

    return build_workbook(
        [
            ["Loan book", None, None],
            [],
            ["  approved", "LOAN AMOUNT ", "Borrower", "Term", "Rate", "grace period", "Comment"],
            ["yes", "$1,234.50", "Alice", "5 years", "0.0725", "6 months", "first"],
            ["", "", "", "", "", "", ""],
            ["no", "20000", "Bob", "10y", "", "", ""],
            [],
            ["y", "", "Carol", "-3", "0.05", "0", "last"],
        ]
    )
