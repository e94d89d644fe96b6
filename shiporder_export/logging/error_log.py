from __future__ import annotations

from collections import Counter
from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import ErrorRecord

"""Buffered JSON Lines log of skipped rows.

Records collect in memory while the sheet is scanned and are appended to
``logs/errors-YYYYMMDD-HHMMSS.log`` (UTC) on flush(). A run without row
failures leaves no log file behind.
"""

__all__ = [
    "ErrorLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    def __init__(self, logs_dir: Path = LOGS_DIR) -> None:
        self.logs_dir = logs_dir
        self._pending: list[ErrorRecord] = []
        self._counts: Counter[str] = Counter()
        self._path: Path | None = None

    @property
    def file_path(self) -> Path:
        # fixed on first use so every flush of a run lands in the same file
        if self._path is None:
            self._path = self.logs_dir / f"errors-{datetime.now(UTC).strftime(TIMESTAMP_FMT)}.log"
        return self._path

    @property
    def records(self) -> list[ErrorRecord]:
        """Records not yet flushed."""
        return list(self._pending)

    def append(self, record: ErrorRecord) -> None:
        self._pending.append(record)
        self._counts[record.error_type] += 1

    def counts_by_type(self) -> dict[str, int]:
        """error_type -> number of records appended over the buffer's lifetime."""
        return dict(sorted(self._counts.items()))

    def __len__(self) -> int:
        return len(self._pending)

    def flush(self) -> Path | None:
        """Append pending records to the log file.

        Returns:
            The log path, or None when there was nothing to write.
        """
        if not self._pending:
            return None
        path = self.file_path
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as fh:
            fh.writelines(f"{r.to_json_line()}\n" for r in self._pending)
        self._pending.clear()
        return path
