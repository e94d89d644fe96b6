from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..config.loader import ExportConfig
from ..errors import ExportError, OutputWriteError
from ..excel.cells import CellResolver, FormulaEvaluator
from ..excel.extractor import extract_row
from ..excel.highlight import get_highlighted_rows
from ..excel.reader import open_workbook, resolve_sheet
from ..logging.error_log import ErrorLogBuffer
from ..models.error_record import ErrorRecord
from ..models.export_result import ExportResult, PipelineState
from ..models.order import OrderData
from ..output.writer import write_orders
from .aggregator import OrderAggregator

"""Export pipeline: workbook -> highlighted rows -> orders -> XML files.

    start -> workbook_opened -> sheet_resolved -> rows_scanned
          -> orders_aggregated -> done            (failed from any state)

Fatal errors (missing workbook, unsupported format, missing sheet, output
failures) move the pipeline to FAILED and propagate as ExportError; any
other exception escaping a stage is wrapped in one. Fatal errors also leave a
``row=-1`` record in the error log. A failure inside a single row is logged,
recorded in the error log and the row is skipped; it never fails the run.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "OrderExportPipeline",
    "run_export",
]


class OrderExportPipeline:
    """One export run over the configured workbook and sheet."""

    def __init__(
        self,
        config: ExportConfig,
        *,
        error_log: ErrorLogBuffer | None = None,
        evaluator_factory: Callable[[Path], Any] = FormulaEvaluator,
    ) -> None:
        self.config = config
        self.error_log = error_log if error_log is not None else ErrorLogBuffer()
        self.evaluator_factory = evaluator_factory
        self.state = PipelineState.START
        self.highlighted_rows: set[int] = set()
        self.processed_rows: list[int] = []
        self.skipped_rows: list[int] = []

    def _transition(self, state: PipelineState) -> None:
        logger.debug("pipeline %s -> %s", self.state.value, state.value)
        self.state = state

    def _process_row(self, resolver: CellResolver, aggregator: OrderAggregator, row_number: int) -> None:
        try:
            row = extract_row(resolver, row_number)
            aggregator.add_row(row)
        except Exception as e:  # row-local: skip the row, keep going
            logger.warning("Error processing row %d: %s", row_number, e)
            self.skipped_rows.append(row_number)
            self.error_log.append(
                ErrorRecord.for_row(self.config.excel_name, self.config.sheet_name, row_number, e)
            )
            return
        self.processed_rows.append(row_number)

    def collect_orders(self) -> list[OrderData]:
        """Scan the sheet and return the finalised orders in first-seen order."""
        path = self.config.excel_file
        aggregator = OrderAggregator()
        try:
            with open_workbook(path) as workbook:
                self._transition(PipelineState.WORKBOOK_OPENED)
                sheet = resolve_sheet(workbook, self.config.sheet_name)
                self._transition(PipelineState.SHEET_RESOLVED)

                self.highlighted_rows = get_highlighted_rows(sheet)
                logger.info(
                    "Found %d highlighted rows: %s",
                    len(self.highlighted_rows),
                    ", ".join(str(r) for r in sorted(self.highlighted_rows)),
                )

                resolver = CellResolver(sheet, self.evaluator_factory(path))
                for row_number in range(2, sheet.max_row + 1):
                    if row_number in self.highlighted_rows:
                        self._process_row(resolver, aggregator, row_number)
                self._transition(PipelineState.ROWS_SCANNED)
        except ExportError:
            self._transition(PipelineState.FAILED)
            raise
        except Exception as e:
            self._transition(PipelineState.FAILED)
            raise ExportError(f"unexpected failure reading {path.name}: {e}") from e

        orders = aggregator.finalize()
        self._transition(PipelineState.ORDERS_AGGREGATED)
        return orders

    def _write(self, orders: list[OrderData]) -> list[Path]:
        try:
            return write_orders(orders, self.config.output_directory)
        except ExportError:
            self._transition(PipelineState.FAILED)
            raise
        except Exception as e:
            self._transition(PipelineState.FAILED)
            raise OutputWriteError(f"unexpected failure writing XML: {e}") from e

    def run(self) -> ExportResult:
        """Collect orders and write one XML file per order.

        Raises:
            ExportError: for any fatal failure; the pipeline state is FAILED
        """
        start_time = datetime.now(UTC)
        log_path: Path | None = None
        try:
            try:
                orders = self.collect_orders()
                written = self._write(orders)
            except ExportError as e:
                self.error_log.append(ErrorRecord.for_file(self.config.excel_name, self.config.sheet_name, e))
                raise
        finally:
            log_path = self.error_log.flush()
            if log_path is not None:
                counts = ", ".join(f"{k}={v}" for k, v in self.error_log.counts_by_type().items())
                logger.info("errors written to %s (%s)", log_path, counts)

        self._transition(PipelineState.DONE)
        end_time = datetime.now(UTC)
        return ExportResult(
            highlighted_rows=len(self.highlighted_rows),
            processed_rows=len(self.processed_rows),
            skipped_rows=len(self.skipped_rows),
            orders=len(orders),
            files_written=len(written),
            output_directory=self.config.output_directory,
            start_time=start_time,
            end_time=end_time,
            elapsed_seconds=(end_time - start_time).total_seconds(),
            state=self.state,
            error_log_path=log_path,
        )


def run_export(config: ExportConfig, **kwargs: Any) -> ExportResult:
    return OrderExportPipeline(config, **kwargs).run()
