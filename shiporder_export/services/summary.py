from __future__ import annotations

from ..models.export_result import ExportResult

"""SUMMARY line rendering for the ship-order exporter."""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # avoid scientific notation for very small numbers
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: ExportResult) -> str:
    """Render a SUMMARY line from an ExportResult.

    Format:
    SUMMARY highlighted={h} rows={r} skipped={s} orders={o} files={f} elapsed_sec={e}

    Examples:
        >>> from datetime import datetime, timezone
        >>> from pathlib import Path
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> result = ExportResult(
        ...     highlighted_rows=5, processed_rows=4, skipped_rows=1, orders=2,
        ...     files_written=2, output_directory=Path("out"), start_time=t,
        ...     end_time=t, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY highlighted=5 rows=4 skipped=1 orders=2 files=2 elapsed_sec=2'
    """
    return (
        f"SUMMARY highlighted={result.highlighted_rows} "
        f"rows={result.processed_rows} "
        f"skipped={result.skipped_rows} "
        f"orders={result.orders} "
        f"files={result.files_written} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
