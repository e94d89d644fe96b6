from __future__ import annotations

import logging

from ..models.order import ORDER_PERSON, ContactInfo, ItemData, OrderData
from ..models.row_data import RowData
from .contact import parse_contact_info

"""Order aggregation: group extracted rows into orders by a composite identity.

    baseId      = row.id or "ORD-" + city without spaces
    shipName    = contact.name or "User"
    shippingKey = city + "-" + region, spaces and commas removed
    identity    = "{baseId}-{shipName}-{shippingKey}-{YYYYMMDD}"

Rows without an order id fall back to the city-derived id, so unrelated
id-less orders for the same city, recipient, region and date merge into one.
That behaviour is kept as-is.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "AggregatorFinalizedError",
    "OrderAggregator",
    "build_item",
    "compute_unique_identity",
]

DEFAULT_SHIP_NAME = "User"
SYNTHETIC_ID_PREFIX = "ORD-"


class AggregatorFinalizedError(RuntimeError):
    pass


def compute_unique_identity(row: RowData, contact: ContactInfo) -> str:
    base_id = row.order_id if row.order_id else f"{SYNTHETIC_ID_PREFIX}{row.city.replace(' ', '')}"
    ship_name = contact.name if contact.name else DEFAULT_SHIP_NAME
    shipping_key = f"{row.city}-{contact.region}".replace(" ", "").replace(",", "")
    return f"{base_id}-{ship_name}-{shipping_key}-{row.order_date:%Y%m%d}"


def build_item(row: RowData) -> ItemData:
    return ItemData(
        title=f"{row.category} - {row.product}",
        note=f"Category: {row.category}",
        quantity=row.quantity,
        price=row.unit_price,
        total=row.total,
    )


class OrderAggregator:
    """Owns the ``identity -> OrderData`` mapping for one run.

    The mapping keeps first-seen order; items are appended in the order rows
    are added. After finalize() the aggregator rejects further rows.
    """

    def __init__(self) -> None:
        self._orders: dict[str, OrderData] = {}
        self._finalized = False

    def __len__(self) -> int:
        return len(self._orders)

    def __contains__(self, identity: object) -> bool:
        return identity in self._orders

    def add_row(self, row: RowData) -> OrderData:
        """Merge *row* into its order, creating the order on first sight."""
        if self._finalized:
            raise AggregatorFinalizedError("cannot add rows after finalize()")

        contact = parse_contact_info(row.contact)
        identity = compute_unique_identity(row, contact)

        order = self._orders.get(identity)
        if order is None:
            order = OrderData(
                unique_identity=identity,
                order_id=row.order_id,
                order_date=row.order_date,
                order_person=ORDER_PERSON,
                ship_to_name=contact.name,
                ship_to_address=contact.address,
                ship_to_city=row.city,
                ship_to_region=contact.region,
            )
            self._orders[identity] = order
            logger.debug("row=%d new order %s", row.row_number, identity)
        else:
            logger.debug("row=%d merged into %s", row.row_number, identity)

        order.items.append(build_item(row))
        return order

    def finalize(self) -> list[OrderData]:
        """Freeze the aggregator and return orders in first-seen order."""
        self._finalized = True
        return list(self._orders.values())
