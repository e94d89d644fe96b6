from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, ExportConfig, load_config
from ..errors import ExportError
from ..logging.init import log_summary, set_debug, setup_logging
from ..services.pipeline import run_export
from ..services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env (override mode) and config/export.yml
- Export highlighted rows of the configured sheet as one XML file per order
- Print a SUMMARY line

Exit codes: 0 on success (skipped rows included), 1 on config or fatal export errors.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1

INSPECT_ROWS = 5


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv so its values win over the config file."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Highlighted Excel rows -> ship-order XML files")
    p.add_argument("--config", default=str(DEFAULT_CONFIG_PATH), help="Config file (YAML or JSON)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print sheet header & first rows then exit")
    return p.parse_args(argv)


def _inspect_data(cfg: ExportConfig) -> int:
    from ..excel.reader import read_excel_file

    try:
        frames = read_excel_file(cfg.excel_file, target_sheets=[cfg.sheet_name])
    except ExportError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    df = frames.get(cfg.sheet_name)
    if df is None:
        print(f"inspect: worksheet '{cfg.sheet_name}' not found")
        return EXIT_FATAL
    print(f"FILE: {cfg.excel_file.name}")
    print(f"  SHEET: {cfg.sheet_name} rows={len(df)} cols={[str(c) for c in df.columns]}")
    for record in df.head(INSPECT_ROWS).to_dict(orient="records"):
        # timestamps are not JSON friendly; isoformat keeps the line readable
        safe = {k: (v.isoformat() if hasattr(v, "isoformat") else v) for k, v in record.items()}
        print("    sample_row=", safe)
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # an explicit [] must not fall back to sys.argv (pytest flags would leak in)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    try:
        cfg = load_config(Path(args.config))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    if args.inspect_data:
        return _inspect_data(cfg)

    logger.info(f"Processing workbook: {cfg.excel_file} (sheet '{cfg.sheet_name}')")
    try:
        result = run_export(cfg)
    except ExportError as e:
        logger.error(f"Something went wrong: {e}")
        return EXIT_FATAL

    logger.info("XML files generated successfully!")
    summary_line = render_summary_line(result)
    # log_summary adds the "SUMMARY " prefix itself
    log_summary(summary_line[len("SUMMARY "):])
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
