from __future__ import annotations

import math
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

import pandas as pd
from openpyxl.utils.datetime import from_excel

from ..errors import MissingFieldError
from ..models.row_data import RowData
from .cells import CellResolver

"""Row extraction: read the fixed column set of one highlighted row.

Defaults for empty cells:
- id / city / category / product / contact -> ""
- quantity / unit price / total -> 0
- date -> MissingFieldError("date required"), the row is skipped
"""

__all__ = [
    "DATE_REQUIRED",
    "extract_row",
    "to_decimal",
    "to_quantity",
    "to_text",
]

DATE_REQUIRED = "date required"

# 1-based column indexes
COL_ID = 1
COL_DATE = 2
COL_CITY = 3
COL_CATEGORY = 4
COL_PRODUCT = 5
COL_QUANTITY = 6
COL_CONTACT = 7
COL_UNIT_PRICE = 8
COL_TOTAL = 9

ZERO = Decimal("0")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def to_text(value: Any) -> str:
    """Render a cell value as text; whole floats lose their trailing ``.0``."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        return value.isoformat(sep=" ")
    return str(value).strip()


def to_date(value: Any, row_number: int) -> date:
    if _is_blank(value):
        raise MissingFieldError(DATE_REQUIRED, row_number)
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if _is_number(value):
        # serial number in a cell without a date format
        return from_excel(float(value)).date()
    parsed = pd.to_datetime(str(value).strip())
    if pd.isna(parsed):
        raise ValueError(f"unparseable date: {value!r}")
    return parsed.date()


def to_quantity(value: Any) -> int:
    if _is_blank(value):
        return 0
    if isinstance(value, bool):
        raise ValueError(f"quantity is not a number: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"quantity must be a whole number: {value!r}")
        return int(value)
    return int(str(value).strip())


def to_decimal(value: Any) -> Decimal:
    """Convert a literal cell value to Decimal; blank cells are zero."""
    if _is_blank(value):
        return ZERO
    if isinstance(value, bool):
        raise ValueError(f"not a number: {value!r}")
    try:
        result = Decimal(str(value) if _is_number(value) else str(value).strip())
    except InvalidOperation as e:
        raise ValueError(f"not a number: {value!r}") from e
    # Decimal accepts "NaN" and "Infinity"; neither can be written as an amount
    if not result.is_finite():
        raise ValueError(f"not a finite number: {value!r}")
    return result


def formula_decimal(value: Any) -> Decimal:
    """Formula results count only when numeric; anything else is zero."""
    if _is_number(value) and math.isfinite(value):
        return Decimal(str(value))
    return ZERO


def extract_row(resolver: CellResolver, row_number: int) -> RowData:
    """Read one row into RowData.

    Raises:
        MissingFieldError: the date cell is empty
        ValueError: a cell could not be converted (bad date, quantity, price)
    """

    def cell(column: int) -> Any:
        return resolver.resolve(row_number, column).value

    total_cell = resolver.resolve(row_number, COL_TOTAL)
    if total_cell.from_formula:
        total = formula_decimal(total_cell.value)
    else:
        total = to_decimal(total_cell.value)

    return RowData(
        row_number=row_number,
        order_id=to_text(cell(COL_ID)),
        order_date=to_date(cell(COL_DATE), row_number),
        city=to_text(cell(COL_CITY)),
        category=to_text(cell(COL_CATEGORY)),
        product=to_text(cell(COL_PRODUCT)),
        quantity=to_quantity(cell(COL_QUANTITY)),
        contact=to_text(cell(COL_CONTACT)),
        unit_price=to_decimal(cell(COL_UNIT_PRICE)),
        total=total,
    )
