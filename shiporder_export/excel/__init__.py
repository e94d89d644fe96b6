"""Workbook access: reading, highlight selection, cell resolution, row extraction."""
