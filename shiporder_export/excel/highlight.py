from __future__ import annotations

import logging

from openpyxl.styles.colors import COLOR_INDEX, Color
from openpyxl.styles.fills import Fill
from openpyxl.worksheet.worksheet import Worksheet

"""Highlight selection: which rows did the sheet author mark for export?

A row is selected when the fill of its first-column cell is a real colour,
i.e. none of transparent / white / black. The header row is never selected.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "EXCLUDED_COLORS",
    "fill_color_name",
    "get_highlighted_rows",
    "is_highlighted",
]

TRANSPARENT = "Transparent"
WHITE = "White"
BLACK = "Black"

EXCLUDED_COLORS = frozenset({TRANSPARENT, WHITE, BLACK})

# indexed 64/65 are the system foreground/background ("automatic")
_SYSTEM_INDEXES = (64, 65)

# theme slots 0/1 are the document background (white) and text (black)
_THEME_NAMES = {0: WHITE, 1: BLACK}


def _rgb_name(rgb: str) -> str:
    hex6 = rgb[-6:].upper()
    if hex6 == "FFFFFF":
        return WHITE
    if hex6 == "000000":
        return BLACK
    return f"#{hex6}"


def _color_name(color: Color | None) -> str | None:
    if color is None:
        return None
    if color.type == "rgb":
        rgb = color.rgb
        if isinstance(rgb, str) and len(rgb) >= 6:
            return _rgb_name(rgb)
        return None
    if color.type == "indexed":
        idx = color.indexed
        if idx is None or idx in _SYSTEM_INDEXES or idx >= len(COLOR_INDEX):
            return None
        return _rgb_name(COLOR_INDEX[idx])
    if color.type == "theme":
        if not color.tint and color.theme in _THEME_NAMES:
            return _THEME_NAMES[color.theme]
        return f"theme:{color.theme}"
    return None


def fill_color_name(fill: Fill | None) -> str | None:
    """Name the background colour of *fill*.

    Returns "Transparent" for an empty pattern, "White" / "Black" for those
    colours, a ``#RRGGBB`` or ``theme:N`` label otherwise, and None when the
    colour cannot be determined.
    """
    if fill is None:
        return None
    pattern = getattr(fill, "patternType", None)
    if not pattern or pattern == "none":
        return TRANSPARENT
    return _color_name(getattr(fill, "fgColor", None))


def is_highlighted(fill: Fill | None) -> bool:
    name = fill_color_name(fill)
    return name is not None and name not in EXCLUDED_COLORS


def get_highlighted_rows(worksheet: Worksheet) -> set[int]:
    """Return the 1-based row numbers (row 2 onwards) whose column-A fill is highlighted."""
    rows: set[int] = set()
    for row in worksheet.iter_rows(min_row=2, max_col=1):
        cell = row[0]
        if is_highlighted(cell.fill):
            rows.add(cell.row)
    logger.debug("sheet=%s highlighted_rows=%s", worksheet.title, sorted(rows))
    return rows
