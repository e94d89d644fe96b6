#!/usr/bin/env python3
"""Sample workbook generation for the ship-order exporter.

Writes a demo workbook whose layout matches what the exporter expects:
- Row 1: header row
- Row 2+: order lines; column A is filled yellow on rows marked for export
- Column I holds a ``=F*H`` formula so totals exercise formula evaluation

A matching config/export.yml is written next to it unless --no-config is given.
"""
from __future__ import annotations

import argparse
import random
import sys
from datetime import date, timedelta
from pathlib import Path

import yaml
from openpyxl import Workbook
from openpyxl.styles import PatternFill

HEADER = ["Order ID", "Date", "City", "Category", "Product", "Quantity", "Contact", "Unit Price", "Total"]

HIGHLIGHT = PatternFill(fill_type="solid", fgColor="FFFF00")

CITIES = {
    "Boston": ("MA", "02108"),
    "Los Angeles": ("CA", "90001"),
    "New York": ("NY", "10001"),
    "San Diego": ("CA", "92101"),
}
PRODUCTS = {
    "Bars": ["Carrot", "Bran", "Oatmeal Raisin"],
    "Cookies": ["Chocolate Chip", "Arrowroot"],
    "Crackers": ["Whole Wheat"],
    "Snacks": ["Potato Chips", "Pretzels"],
}
NAMES = ["Jane Doe", "John Smith", "Ana Lopez", "Kenji Sato"]


def generate_rows(rows: int, seed: int = 42) -> list[list[object]]:
    """Generate order lines; consecutive lines often share an order."""
    rng = random.Random(seed)
    out: list[list[object]] = []
    start = date(2024, 1, 1)
    order_no = 1000
    while len(out) < rows:
        order_no += 1
        city = rng.choice(list(CITIES))
        region, zip_code = CITIES[city]
        name = rng.choice(NAMES)
        contact = f"{name}, {rng.randint(1, 999)} Main St, {city}, {region}, {zip_code}"
        order_date = start + timedelta(days=rng.randint(0, 60))
        # roughly one in four orders has no id and falls back to ORD-{city}
        order_id = "" if rng.random() < 0.25 else str(order_no)
        for _ in range(rng.randint(1, 3)):
            category = rng.choice(list(PRODUCTS))
            out.append([
                order_id,
                order_date,
                city,
                category,
                rng.choice(PRODUCTS[category]),
                rng.randint(1, 50),
                contact,
                round(rng.uniform(0.5, 5.0), 2),
            ])
    return out[:rows]


def write_workbook(path: Path, rows: list[list[object]], sheet_name: str, highlight_ratio: float, seed: int) -> int:
    """Write *rows* to *path*; returns the number of highlighted rows."""
    rng = random.Random(seed)
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name
    ws.append(HEADER)
    highlighted = 0
    for values in rows:
        ws.append(values)
        r = ws.max_row
        ws.cell(row=r, column=9, value=f"=F{r}*H{r}")
        ws.cell(row=r, column=2).number_format = "yyyy-mm-dd"
        if rng.random() < highlight_ratio:
            ws.cell(row=r, column=1).fill = HIGHLIGHT
            highlighted += 1
    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    return highlighted


def write_config(config_path: Path, workbook: Path, sheet_name: str, output_dir: Path) -> None:
    config_path.parent.mkdir(parents=True, exist_ok=True)
    data = {
        "ExcelPath": str(workbook.parent),
        "ExcelName": workbook.name,
        "SheetName": sheet_name,
        "XmlOutputPath": str(output_dir),
    }
    config_path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate a sample order workbook")
    parser.add_argument("--rows", type=int, default=40, help="Number of order lines")
    parser.add_argument("--output", default="data/FoodSales.xlsx", help="Workbook path")
    parser.add_argument("--sheet", default="FoodSales", help="Sheet name")
    parser.add_argument("--highlight-ratio", type=float, default=0.6, help="Share of rows to highlight")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--xml-output", default="output/xml", help="XmlOutputPath written to the config")
    parser.add_argument("--config", default="config/export.yml", help="Config file to write")
    parser.add_argument("--no-config", action="store_true", help="Do not write a config file")
    args = parser.parse_args(argv)

    if args.rows <= 0:
        print("--rows must be positive", file=sys.stderr)
        return 1

    workbook = Path(args.output)
    rows = generate_rows(args.rows, seed=args.seed)
    highlighted = write_workbook(workbook, rows, args.sheet, args.highlight_ratio, args.seed)
    print(f"wrote {workbook} rows={len(rows)} highlighted={highlighted}")

    if not args.no_config:
        write_config(Path(args.config), workbook, args.sheet, Path(args.xml_output))
        print(f"wrote {args.config}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
