from __future__ import annotations

import pytest

from shiporder_export.models.order import ContactInfo
from shiporder_export.services.contact import parse_contact_info


def test_five_part_contact_uses_second_to_last_as_region():
    info = parse_contact_info("Jane Doe, 123 Main St, Springfield, IL, 62704")

    assert info.name == "Jane Doe"
    assert info.address == "123 Main St, Springfield"
    assert info.city == "Springfield"
    assert info.region == "IL"


def test_four_part_contact():
    info = parse_contact_info("Bob,9 Elm Rd,Austin,TX")
    assert info == ContactInfo(name="Bob", address="9 Elm Rd, Austin", city="Austin", region="Austin")


def test_pieces_are_trimmed():
    info = parse_contact_info("  Ana Lopez ,  5 Oak Ave , Boston ,  MA  , 02108 ")
    assert info.name == "Ana Lopez"
    assert info.address == "5 Oak Ave, Boston"
    assert info.region == "MA"


@pytest.mark.parametrize(
    "contact",
    [
        "no commas here",
        "",
        "Jane Doe, 123 Main St",
        "Jane Doe, 123 Main St, Springfield",
    ],
)
def test_malformed_contact_falls_back_to_unknown(contact: str):
    info = parse_contact_info(contact)
    assert info == ContactInfo.unknown()
    assert (info.name, info.address, info.city, info.region) == ("Unknown",) * 4


def test_empty_pieces_are_kept():
    info = parse_contact_info(", 1 Main St, Boston, MA, 02108")
    assert info.name == ""
    assert info.region == "MA"
