from __future__ import annotations

import zipfile
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path

import openpyxl
import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from ..errors import SheetNotFoundError, UnsupportedFormatError, WorkbookNotFoundError, WorkbookReadError

"""Workbook access.

- open_workbook(): scoped read access; the file handle is released on every
  exit path
- resolve_sheet(): look up the configured sheet or fail the run
- read_excel_file(): raw pandas frames, used by ``--inspect-data``
"""

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "check_workbook_path",
    "open_workbook",
    "read_excel_file",
    "resolve_sheet",
]

SUPPORTED_EXTENSIONS = (".xlsx", ".xlsm")


def check_workbook_path(path: Path) -> None:
    """Raise the fatal error matching a missing or unsupported workbook path."""
    if not path.is_file():
        raise WorkbookNotFoundError(f"Excel file not found: {path}")
    if path.suffix.lower() not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFormatError(
            f"Unsupported file format '{path.suffix}'. Use {' or '.join(SUPPORTED_EXTENSIONS)}."
        )


@contextmanager
def open_workbook(path: Path) -> Iterator[Workbook]:
    """Open *path* for reading and yield the openpyxl workbook.

    Formulas are kept as written (``data_only=False``) so the caller can tell
    formula cells apart from literals; fills are loaded with the styles.

    Raises:
        WorkbookNotFoundError: path does not exist
        UnsupportedFormatError: extension is not .xlsx / .xlsm
        WorkbookReadError: the file is not a readable workbook
    """
    check_workbook_path(path)
    with path.open("rb") as fh:
        try:
            workbook = openpyxl.load_workbook(fh, data_only=False)
        except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as e:
            raise WorkbookReadError(f"cannot read workbook {path.name}: {e}") from e
        try:
            yield workbook
        finally:
            workbook.close()


def resolve_sheet(workbook: Workbook, sheet_name: str) -> Worksheet:
    if sheet_name not in workbook.sheetnames:
        raise SheetNotFoundError(f"Worksheet '{sheet_name}' not found.")
    return workbook[sheet_name]


def read_excel_file(path: Path, target_sheets: Iterable[str] | None = None) -> dict[str, pd.DataFrame]:
    """Read an Excel file returning raw DataFrames keyed by sheet name.

    Parameters
    ----------
    path: workbook path
    target_sheets: restrict to these sheets (None reads all of them)
    """
    check_workbook_path(path)
    dfs: dict[str, pd.DataFrame] = {}
    with pd.ExcelFile(path, engine="openpyxl") as xls:
        for name in xls.sheet_names:
            if target_sheets is not None and str(name) not in target_sheets:
                continue
            dfs[str(name)] = xls.parse(name, header=0)
    return dfs
