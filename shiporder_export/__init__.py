"""Ship-order exporter: highlighted spreadsheet rows to one XML file per order."""

__version__ = "0.1.0"
