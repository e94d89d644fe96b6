from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

"""Pipeline state and run result models for the ship-order exporter."""


class PipelineState(Enum):
    """Lifecycle of one export run.

    State transitions:
        start → workbook_opened → sheet_resolved → rows_scanned
        → orders_aggregated → done

    FAILED is reachable from any state when a fatal error occurs. Row-level
    failures never move the pipeline to FAILED.
    """
    START = "start"
    WORKBOOK_OPENED = "workbook_opened"
    SHEET_RESOLVED = "sheet_resolved"
    ROWS_SCANNED = "rows_scanned"
    ORDERS_AGGREGATED = "orders_aggregated"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class ExportResult:
    """Aggregated metrics for the SUMMARY line."""
    highlighted_rows: int  # rows selected by fill colour
    processed_rows: int  # highlighted rows that produced an item
    skipped_rows: int  # highlighted rows dropped by a row-level failure
    orders: int
    files_written: int
    output_directory: Path
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    state: PipelineState = PipelineState.DONE
    error_log_path: Path | None = None  # set only when row errors were flushed
