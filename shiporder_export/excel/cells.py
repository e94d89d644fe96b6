from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import formulas
import numpy as np
import openpyxl
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.formula import ArrayFormula
from openpyxl.worksheet.worksheet import Worksheet

"""Cell resolution: one place that turns a sheet cell into a typed scalar.

Literal cells come straight from openpyxl. Formula cells are evaluated with the
``formulas`` library; when that cannot produce a value, Excel's own cached
result (``data_only=True``) is used instead. Callers never see formula text.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "CellResolver",
    "FormulaEvaluator",
    "ResolvedCell",
    "is_formula_cell",
]

# "'[book.xlsx]SHEET NAME'!E2"
_RESULT_KEY = re.compile(r"^'\[[^\]]+\](?P<sheet>.+?)'!(?P<coord>[A-Z]+\d+)$", re.IGNORECASE)


@dataclass(frozen=True)
class ResolvedCell:
    value: Any  # None when the cell is empty
    from_formula: bool = False


def is_formula_cell(value: Any) -> bool:
    return isinstance(value, ArrayFormula) or (isinstance(value, str) and value.startswith("="))


def _unwrap(value: Any) -> Any:
    """Reduce a ``formulas`` result (Ranges / ndarray / numpy scalar) to a plain Python value."""
    v = getattr(value, "value", value)
    if isinstance(v, np.ndarray):
        if v.size != 1:
            return None
        v = v.flat[0]
    if isinstance(v, np.generic):
        v = v.item()
    return v


class FormulaEvaluator:
    """Evaluates formula cells of one workbook file.

    The whole model is calculated once, on the first request, and kept for the
    rest of the run.
    """

    def __init__(self, workbook_path: Path) -> None:
        self.workbook_path = workbook_path
        self._computed: dict[tuple[str, str], Any] | None = None
        self._cached: dict[tuple[str, str], Any] | None = None

    def _compute(self) -> dict[tuple[str, str], Any]:
        computed: dict[tuple[str, str], Any] = {}
        try:
            xl_model = formulas.ExcelModel().loads(str(self.workbook_path)).finish()
            results = xl_model.calculate()
        except Exception:
            logger.warning(
                "formula evaluation failed for %s, falling back to cached values",
                self.workbook_path.name,
                exc_info=True,
            )
            return computed
        for key, val in results.items():
            m = _RESULT_KEY.match(str(key))
            if not m:
                continue
            computed[(m.group("sheet").upper(), m.group("coord").upper())] = _unwrap(val)
        logger.debug("formula values computed=%d", len(computed))
        return computed

    def _load_cached(self) -> dict[tuple[str, str], Any]:
        cached: dict[tuple[str, str], Any] = {}
        try:
            with self.workbook_path.open("rb") as fh:
                wb = openpyxl.load_workbook(fh, data_only=True)
                try:
                    for ws in wb.worksheets:
                        for row in ws.iter_rows():
                            for cell in row:
                                if cell.value is not None:
                                    cached[(ws.title.upper(), cell.coordinate.upper())] = cell.value
                finally:
                    wb.close()
        except Exception:
            logger.warning("cached formula values unavailable for %s", self.workbook_path.name, exc_info=True)
        return cached

    def evaluate(self, sheet_name: str, coordinate: str) -> Any:
        key = (sheet_name.upper(), coordinate.upper())
        if self._computed is None:
            self._computed = self._compute()
        value = self._computed.get(key)
        if value is not None:
            return value
        if self._cached is None:
            self._cached = self._load_cached()
        return self._cached.get(key)


class CellResolver:
    """Resolve cells of one worksheet to typed scalars."""

    def __init__(self, worksheet: Worksheet, evaluator: FormulaEvaluator | Any) -> None:
        self.worksheet = worksheet
        self.evaluator = evaluator

    def resolve(self, row: int, column: int) -> ResolvedCell:
        value = self.worksheet.cell(row=row, column=column).value
        if is_formula_cell(value):
            coordinate = f"{get_column_letter(column)}{row}"
            return ResolvedCell(self.evaluator.evaluate(self.worksheet.title, coordinate), from_formula=True)
        return ResolvedCell(value)
