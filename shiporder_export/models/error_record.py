from __future__ import annotations

import json
import re
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

from ..errors import MissingFieldError

"""Failure records written to the JSON Lines error log.

One record per skipped row, plus one with ``row=-1`` when a fatal error
aborts the run. A row record:

    {"timestamp": "2024-01-05T10:00:00.000000Z", "file": "FoodSales.xlsx",
     "sheet": "FoodSales", "row": 7, "error_type": "MISSING_FIELD",
     "message": "date required (row 7)"}
"""

__all__ = [
    "FILE_LEVEL_ROW",
    "INVALID_VALUE",
    "MISSING_FIELD",
    "UNEXPECTED_ERROR",
    "ErrorRecord",
    "classify_fatal_error",
    "classify_row_error",
]

MISSING_FIELD = "MISSING_FIELD"
INVALID_VALUE = "INVALID_VALUE"
UNEXPECTED_ERROR = "UNEXPECTED_ERROR"
FILE_LEVEL_ROW = -1


def classify_row_error(exc: BaseException) -> str:
    """Map an exception raised while reading a row to its error_type."""
    if isinstance(exc, MissingFieldError):
        return MISSING_FIELD
    if isinstance(exc, ValueError):
        return INVALID_VALUE
    return UNEXPECTED_ERROR


def classify_fatal_error(exc: BaseException) -> str:
    """SheetNotFoundError -> SHEET_NOT_FOUND; a bare ExportError is UNEXPECTED_ERROR."""
    name = type(exc).__name__.removesuffix("Error")
    if name in ("", "Export"):
        return UNEXPECTED_ERROR
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).upper()


@dataclass(frozen=True)
class ErrorRecord:
    timestamp: str  # ISO8601 UTC, 'Z' suffix
    file: str
    sheet: str
    row: int
    error_type: str
    message: str

    @staticmethod
    def create(file: str, sheet: str, row: int, error_type: str, message: str) -> ErrorRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(ts, file, sheet, row, error_type, message)

    @classmethod
    def for_row(cls, file: str, sheet: str, row: int, exc: BaseException) -> ErrorRecord:
        """Record for a row skipped because *exc* was raised while reading it."""
        return cls.create(file, sheet, row, classify_row_error(exc), str(exc))

    @classmethod
    def for_file(cls, file: str, sheet: str, exc: BaseException) -> ErrorRecord:
        """Record for a fatal failure that aborted the run; row is -1."""
        return cls.create(file, sheet, FILE_LEVEL_ROW, classify_fatal_error(exc), str(exc))

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
