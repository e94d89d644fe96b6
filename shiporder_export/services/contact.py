from __future__ import annotations

from ..models.order import ContactInfo

"""Contact string parsing.

"Jane Doe, 123 Main St, Springfield, IL, 62704" ->
    name="Jane Doe", address="123 Main St, Springfield",
    city="Springfield", region="IL" (second-to-last piece)
"""

__all__ = [
    "parse_contact_info",
]

MIN_PARTS = 4


def parse_contact_info(contact: str) -> ContactInfo:
    """Split a comma separated contact string into its parts.

    Strings without a comma, or with fewer than four pieces, resolve to
    ContactInfo.unknown(); malformed contacts never fail the row.
    """
    if "," in contact:
        parts = [p.strip() for p in contact.split(",")]
        if len(parts) >= MIN_PARTS:
            name, street, city = parts[0], parts[1], parts[2]
            return ContactInfo(
                name=name,
                address=f"{street}, {city}",
                city=city,
                region=parts[-2],
            )
    return ContactInfo.unknown()
