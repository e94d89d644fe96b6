from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Config loader for the ship-order exporter.

Responsibilities:
- Load YAML config/export.yml (a JSON appsettings file parses as YAML too)
- Validate required keys against config_schema.json
- Apply environment overrides (EXCEL_PATH / EXCEL_NAME / SHEET_NAME / XML_OUTPUT_PATH)
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")

DEFAULT_CONFIG_PATH = Path("config/export.yml")

# Environment variable -> ExportConfig field
ENV_OVERRIDES = {
    "EXCEL_PATH": "excel_path",
    "EXCEL_NAME": "excel_name",
    "SHEET_NAME": "sheet_name",
    "XML_OUTPUT_PATH": "xml_output_path",
}


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ExportConfig:
    excel_path: str  # directory holding the workbook
    excel_name: str  # workbook file name
    sheet_name: str
    xml_output_path: str  # directory receiving one XML file per order

    @property
    def excel_file(self) -> Path:
        return Path(self.excel_path) / self.excel_name

    @property
    def output_directory(self) -> Path:
        return Path(self.xml_output_path)


def _validate_config_schema(data: Any) -> None:
    """Validate config data against JSON schema.

    Raises:
        ConfigError: If the schema file is missing or unreadable, or the
            config data fails validation (missing keys, wrong types, extra keys).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def apply_env_overrides(cfg: ExportConfig, environ: dict[str, str] | None = None) -> ExportConfig:
    """Return a copy of *cfg* with non-empty environment values taking precedence."""
    env = os.environ if environ is None else environ
    changes = {field: env[name] for name, field in ENV_OVERRIDES.items() if env.get(name)}
    if not changes:
        return cfg
    return replace(cfg, **changes)


def load_config(path: Path = DEFAULT_CONFIG_PATH, *, use_env: bool = True) -> ExportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    cfg = ExportConfig(
        excel_path=data["ExcelPath"],
        excel_name=data["ExcelName"],
        sheet_name=data["SheetName"],
        xml_output_path=data["XmlOutputPath"],
    )
    if use_env:
        cfg = apply_env_overrides(cfg)
    return cfg
