from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from unittest.mock import patch

from conftest import order_row
from shiporder_export.cli import main as cli_main
from shiporder_export.errors import SheetNotFoundError
from shiporder_export.models.export_result import ExportResult


def _result() -> ExportResult:
    t = datetime(2024, 1, 1, tzinfo=UTC)
    return ExportResult(
        highlighted_rows=3,
        processed_rows=2,
        skipped_rows=1,
        orders=2,
        files_written=2,
        output_directory=Path("output"),
        start_time=t,
        end_time=t,
        elapsed_seconds=0.25,
    )


def test_cli_success_prints_summary(temp_workdir: Path, write_config: Path, capsys):
    with patch("shiporder_export.cli.__main__.run_export", return_value=_result()) as run:
        code = cli_main([])

    out = capsys.readouterr().out
    assert code == 0
    cfg = run.call_args.args[0]
    assert cfg.sheet_name == "Orders"
    assert "INFO Processing workbook:" in out
    assert "INFO XML files generated successfully!" in out
    assert out.strip().splitlines()[-1] == (
        "SUMMARY highlighted=3 rows=2 skipped=1 orders=2 files=2 elapsed_sec=0.25"
    )


def test_cli_missing_config_exits_1(temp_workdir: Path, capsys):
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR config: config file not found" in out


def test_cli_invalid_config_exits_1(temp_workdir: Path, capsys):
    (temp_workdir / "config" / "export.yml").write_text("ExcelPath: ./data\n", encoding="utf-8")
    code = cli_main([])
    assert code == 1
    assert "ERROR config: config validation failed" in capsys.readouterr().out


def test_cli_fatal_export_error_exits_1(temp_workdir: Path, write_config: Path, capsys):
    with patch(
        "shiporder_export.cli.__main__.run_export",
        side_effect=SheetNotFoundError("Worksheet 'Orders' not found."),
    ):
        code = cli_main([])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR Something went wrong: Worksheet 'Orders' not found." in out
    assert "SUMMARY" not in out


def test_cli_missing_workbook_end_to_end(temp_workdir: Path, write_config: Path, capsys):
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 1
    assert "Excel file not found" in out


def test_cli_explicit_config_path(temp_workdir: Path, capsys):
    alt = temp_workdir / "alt.yml"
    alt.write_text(
        "ExcelPath: ./data\nExcelName: other.xlsx\nSheetName: Sheet9\nXmlOutputPath: ./xml\n",
        encoding="utf-8",
    )
    with patch("shiporder_export.cli.__main__.run_export", return_value=_result()) as run:
        code = cli_main(["--config", str(alt)])
    assert code == 0
    cfg = run.call_args.args[0]
    assert (cfg.excel_name, cfg.sheet_name) == ("other.xlsx", "Sheet9")


def test_cli_debug_mode(temp_workdir: Path, write_config: Path, capsys):
    with patch("shiporder_export.cli.__main__.run_export", return_value=_result()):
        code = cli_main(["--debug"])
    out = capsys.readouterr().out
    assert code == 0
    assert "DEBUG debug mode enabled" in out


def test_cli_env_file_overrides_config(temp_workdir: Path, write_config: Path, monkeypatch, capsys):
    # registered with monkeypatch so the values loaded from .env are undone afterwards
    monkeypatch.setenv("SHEET_NAME", "placeholder")
    monkeypatch.setenv("XML_OUTPUT_PATH", "placeholder")
    (temp_workdir / ".env").write_text("SHEET_NAME=FoodSales\nXML_OUTPUT_PATH=./env-xml\n", encoding="utf-8")

    with patch("shiporder_export.cli.__main__.run_export", return_value=_result()) as run:
        code = cli_main([])

    assert code == 0
    cfg = run.call_args.args[0]
    assert cfg.sheet_name == "FoodSales"
    assert cfg.xml_output_path == "./env-xml"
    assert cfg.excel_name == "orders.xlsx"


def test_cli_inspect_data(temp_workdir: Path, write_config: Path, order_workbook, capsys):
    order_workbook([order_row(product="Carrot"), order_row(product="Banana")])
    with patch("shiporder_export.cli.__main__.run_export") as run:
        code = cli_main(["--inspect-data"])

    out = capsys.readouterr().out
    assert code == 0
    run.assert_not_called()
    assert "FILE: orders.xlsx" in out
    assert "SHEET: Orders rows=2" in out
    assert "'Product'" in out
    assert out.count("sample_row=") == 2


def test_cli_inspect_data_missing_sheet(temp_workdir: Path, write_config: Path, order_workbook, capsys):
    order_workbook([order_row()], sheet_name="Other")
    code = cli_main(["--inspect-data"])
    assert code == 1
    assert "inspect: worksheet 'Orders' not found" in capsys.readouterr().out
