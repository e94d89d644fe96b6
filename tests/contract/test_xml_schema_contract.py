from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from lxml import etree

from shiporder_export.models.order import ORDER_PERSON, ItemData, OrderData
from shiporder_export.output.writer import build_shiporder, write_order

"""Output document contract, expressed as an XSD and checked with lxml."""

SHIPORDER_XSD = b"""<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema">
  <xs:simpleType name="amount">
    <xs:restriction base="xs:string">
      <xs:pattern value="-?[0-9]+\\.[0-9]{2}"/>
    </xs:restriction>
  </xs:simpleType>
  <xs:element name="shiporder">
    <xs:complexType>
      <xs:sequence>
        <xs:element name="orderperson" type="xs:string"/>
        <xs:element name="shipto">
          <xs:complexType>
            <xs:sequence>
              <xs:element name="name" type="xs:string"/>
              <xs:element name="address" type="xs:string"/>
              <xs:element name="city" type="xs:string"/>
              <xs:element name="region" type="xs:string"/>
            </xs:sequence>
          </xs:complexType>
        </xs:element>
        <xs:element name="item" minOccurs="0" maxOccurs="unbounded">
          <xs:complexType>
            <xs:sequence>
              <xs:element name="title" type="xs:string"/>
              <xs:element name="note" type="xs:string" minOccurs="0"/>
              <xs:element name="quantity" type="xs:integer"/>
              <xs:element name="price" type="amount"/>
              <xs:element name="total" type="amount"/>
            </xs:sequence>
          </xs:complexType>
        </xs:element>
      </xs:sequence>
      <xs:attribute name="orderid" type="xs:string" use="required"/>
      <xs:attribute name="orderdate" type="xs:date" use="required"/>
    </xs:complexType>
  </xs:element>
</xs:schema>
"""


@pytest.fixture(scope="module")
def schema() -> etree.XMLSchema:
    return etree.XMLSchema(etree.fromstring(SHIPORDER_XSD))


def _order(order_id: str = "1001", items: int = 2) -> OrderData:
    order = OrderData(
        unique_identity=f"{order_id or 'ORD-Boston'}-Jane Doe-Boston-MA-20240105",
        order_id=order_id,
        order_date=date(2024, 1, 5),
        order_person=ORDER_PERSON,
        ship_to_name="Jane Doe",
        ship_to_address="1 Main St, Boston",
        ship_to_city="Boston",
        ship_to_region="MA",
    )
    for n in range(items):
        note = "Category: Bars" if n % 2 == 0 else ""
        order.items.append(ItemData(f"Bars - P{n}", note, n + 1, Decimal("1.255"), Decimal(n) * 3))
    return order


@pytest.mark.parametrize("order_id,items", [("1001", 2), ("", 1), ("42", 0), ("7", 25)])
def test_document_matches_schema(schema, order_id, items):
    schema.assertValid(build_shiporder(_order(order_id, items)))


def test_written_file_matches_schema(schema, tmp_path):
    path = write_order(_order(), tmp_path)
    schema.assertValid(etree.parse(str(path)))


def test_schema_rejects_unformatted_amounts(schema):
    root = build_shiporder(_order())
    root.find("item/price").text = "1.255"
    assert not schema.validate(root)
