from __future__ import annotations

"""Fatal error hierarchy for an export run.

Every fatal failure is raised as an ``ExportError`` subclass chained to its
underlying cause. Row-level failures use ``MissingFieldError`` (or whatever the
cell conversion raised) and never escape the pipeline.
"""

__all__ = [
    "ExportError",
    "WorkbookNotFoundError",
    "UnsupportedFormatError",
    "WorkbookReadError",
    "SheetNotFoundError",
    "OutputWriteError",
    "MissingFieldError",
]


class ExportError(Exception):
    """Base exception for run-aborting errors."""
    pass


class WorkbookNotFoundError(ExportError):
    pass


class UnsupportedFormatError(ExportError):
    pass


class WorkbookReadError(ExportError):
    """The workbook exists but could not be decoded."""


class SheetNotFoundError(ExportError):
    pass


class OutputWriteError(ExportError):
    """Output directory creation or XML file write failed."""


class MissingFieldError(Exception):
    """A required cell is empty. Row-local: the row is skipped."""

    def __init__(self, kind: str, row_number: int | None = None) -> None:
        self.kind = kind
        self.row_number = row_number
        where = f" (row {row_number})" if row_number is not None else ""
        super().__init__(f"{kind}{where}")
