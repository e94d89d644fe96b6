from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path

from lxml import etree

from ..errors import OutputWriteError
from ..models.order import OrderData
from ..services.progress import ProgressTracker

"""XML output: one ``{unique_identity}.xml`` file per order.

    <shiporder orderid="..." orderdate="YYYY-MM-DD">
      <orderperson/>
      <shipto><name/><address/><city/><region/></shipto>
      <item><title/><note/>?<quantity/><price/><total/></item>*
    </shiporder>
"""

logger = logging.getLogger(__name__)

__all__ = [
    "build_shiporder",
    "ensure_output_directory",
    "format_amount",
    "write_order",
    "write_orders",
]

_CENT = Decimal("0.01")


def format_amount(value: Decimal) -> str:
    """Fixed two decimal places, halves rounded away from zero."""
    return str(value.quantize(_CENT, rounding=ROUND_HALF_UP))


def _text_element(parent: etree._Element, tag: str, text: str) -> etree._Element:
    el = etree.SubElement(parent, tag)
    el.text = text
    return el


def build_shiporder(order: OrderData) -> etree._Element:
    root = etree.Element("shiporder")
    root.set("orderid", order.order_id)
    root.set("orderdate", f"{order.order_date:%Y-%m-%d}")
    _text_element(root, "orderperson", order.order_person)

    shipto = etree.SubElement(root, "shipto")
    _text_element(shipto, "name", order.ship_to_name)
    _text_element(shipto, "address", order.ship_to_address)
    _text_element(shipto, "city", order.ship_to_city)
    _text_element(shipto, "region", order.ship_to_region)

    for item in order.items:
        item_el = etree.SubElement(root, "item")
        _text_element(item_el, "title", item.title)
        if item.note:
            _text_element(item_el, "note", item.note)
        _text_element(item_el, "quantity", str(item.quantity))
        _text_element(item_el, "price", format_amount(item.price))
        _text_element(item_el, "total", format_amount(item.total))
    return root


def ensure_output_directory(output_dir: Path) -> Path:
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputWriteError(f"cannot create output directory {output_dir}: {e}") from e
    return output_dir


def write_order(order: OrderData, output_dir: Path) -> Path:
    path = output_dir / f"{order.unique_identity}.xml"
    try:
        tree = etree.ElementTree(build_shiporder(order))
        tree.write(str(path), encoding="utf-8", xml_declaration=True, pretty_print=True)
    except (OSError, ValueError) as e:
        raise OutputWriteError(f"cannot write {path.name}: {e}") from e
    return path


def write_orders(orders: list[OrderData], output_dir: Path) -> list[Path]:
    """Write every order sequentially. The first failure aborts the run."""
    ensure_output_directory(output_dir)
    written: list[Path] = []
    with ProgressTracker(len(orders), description="Writing orders", unit="order") as progress:
        for order in orders:
            written.append(write_order(order, output_dir))
            progress.advance(order.unique_identity)
    logger.debug("wrote %d file(s) to %s", len(written), output_dir)
    return written
