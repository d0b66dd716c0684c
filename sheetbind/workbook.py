"""
RESPONSIBILITIES
- Load workbooks from disk (or start a fresh one) for binding sessions.
- Save workbooks atomically using a temporary file swap.
"""

from __future__ import annotations

import os
from pathlib import Path

import openpyxl
from openpyxl import Workbook

from .utils.log import get_logger

logger = get_logger("workbook")


def load_workbook(path: Path, *, create: bool = False) -> Workbook:
    """Load the workbook at *path*.

    Raises:
        FileNotFoundError: When the file is absent and *create* is False.
    """

    if not path.exists():
        if not create:
            raise FileNotFoundError(f"Workbook not found: {path}")
        logger.info("Starting new workbook", extra={"path": str(path)})
        workbook = Workbook()
        # drop the default empty sheet; callers create the sheets they bind
        workbook.remove(workbook.active)
        return workbook

    logger.info("Loading workbook", extra={"path": str(path)})
    return openpyxl.load_workbook(path)


def _tmp_path(path: Path) -> Path:
    return path.with_name(path.name + ".tmp")


def save_workbook(workbook: Workbook, path: Path) -> Path:
    """Write *workbook* to *path* atomically."""

    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = _tmp_path(path)
    workbook.save(tmp_path)
    os.replace(tmp_path, path)
    logger.info("Workbook saved", extra={"path": str(path)})
    return path
