from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

"""RowData model: the typed values read from one highlighted sheet row.

Column layout (1-based): A id, B date, C city, D category, E product,
F quantity, G contact, H unit price, I total (literal or formula).
"""

__all__ = [
    "RowData",
]


@dataclass(frozen=True)
class RowData:
    """Typed representation of a single highlighted row after extraction."""
    row_number: int  # Excel row number (row 1 is the header)
    order_id: str
    order_date: date
    city: str
    category: str
    product: str
    quantity: int
    contact: str
    unit_price: Decimal
    total: Decimal
