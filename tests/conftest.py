# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable, Iterable
from datetime import date
from pathlib import Path

import pytest
from openpyxl import Workbook
from openpyxl.styles import PatternFill

from shiporder_export.logging.init import reset_logging

HEADER = ["Order ID", "Date", "City", "Category", "Product", "Quantity", "Contact", "Unit Price", "Total"]

YELLOW = PatternFill(fill_type="solid", fgColor="FFFF00")
WHITE = PatternFill(fill_type="solid", fgColor="FFFFFF")
BLACK = PatternFill(fill_type="solid", fgColor="000000")

ENV_KEYS = ("EXCEL_PATH", "EXCEL_NAME", "SHEET_NAME", "XML_OUTPUT_PATH")


@pytest.fixture(autouse=True)
def _clean_state(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """ExcelPath: ./data
ExcelName: orders.xlsx
SheetName: Orders
XmlOutputPath: ./output
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "export.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


def order_row(
    order_id: object = "1001",
    order_date: object = date(2024, 1, 5),
    city: object = "Boston",
    category: object = "Bars",
    product: object = "Carrot",
    quantity: object = 3,
    contact: object = "Jane Doe, 1 Main St, Boston, MA, 02108",
    unit_price: object = 1.5,
    total: object = 4.5,
) -> list[object]:
    return [order_id, order_date, city, category, product, quantity, contact, unit_price, total]


def make_order_workbook(
    path: Path,
    rows: list[list[object]],
    *,
    sheet_name: str = "Orders",
    highlight: Iterable[int] | None = None,
    fills: dict[int, PatternFill] | None = None,
) -> Path:
    """Write a workbook with a header row followed by *rows*.

    highlight: 0-based indexes into *rows* to fill yellow (default: all rows)
    fills: 0-based index -> explicit fill, applied after highlight
    """
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name
    ws.append(HEADER)
    marked = set(range(len(rows))) if highlight is None else set(highlight)
    for i, values in enumerate(rows):
        ws.append(list(values))
        if i in marked:
            ws.cell(row=i + 2, column=1).fill = YELLOW
    for i, fill in (fills or {}).items():
        ws.cell(row=i + 2, column=1).fill = fill
    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    return path


@pytest.fixture()
def order_workbook(temp_workdir: Path) -> Callable[..., Path]:
    """Builder writing data/orders.xlsx (matching write_config) by default."""

    def _build(rows: list[list[object]], name: str = "orders.xlsx", **kwargs) -> Path:
        return make_order_workbook(temp_workdir / "data" / name, rows, **kwargs)

    return _build
