from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

"""Order record models handed to the XML writer.

OrderData is frozen so header fields stay as they were at first insertion;
only the ``items`` list grows while rows are being aggregated.
"""

__all__ = [
    "ContactInfo",
    "ItemData",
    "OrderData",
    "ORDER_PERSON",
    "UNKNOWN",
]

ORDER_PERSON = "Food Sales System"
UNKNOWN = "Unknown"


@dataclass(frozen=True)
class ContactInfo:
    """Structured view of a free-text contact cell."""
    name: str
    address: str  # "{street}, {city}"
    city: str
    region: str

    @classmethod
    def unknown(cls) -> ContactInfo:
        return cls(name=UNKNOWN, address=UNKNOWN, city=UNKNOWN, region=UNKNOWN)


@dataclass(frozen=True)
class ItemData:
    """One line item, built from exactly one highlighted row."""
    title: str  # "{category} - {product}"
    note: str  # "Category: {category}", omitted from XML when empty
    quantity: int
    price: Decimal
    total: Decimal


@dataclass(frozen=True)
class OrderData:
    """One logical shipment, keyed by ``unique_identity``."""
    unique_identity: str
    order_id: str
    order_date: date
    order_person: str
    ship_to_name: str
    ship_to_address: str
    ship_to_city: str
    ship_to_region: str
    items: list[ItemData] = field(default_factory=list)  # source row order
