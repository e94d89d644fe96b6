"""Logging setup and the row-level error log."""
