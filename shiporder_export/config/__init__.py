"""Configuration loading and validation."""

from .loader import DEFAULT_CONFIG_PATH, ConfigError, ExportConfig, load_config

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "ExportConfig",
    "load_config",
]
