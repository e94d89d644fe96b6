"""Domain models for the ship-order exporter."""

from .error_record import ErrorRecord
from .export_result import ExportResult, PipelineState
from .order import ORDER_PERSON, UNKNOWN, ContactInfo, ItemData, OrderData
from .row_data import RowData

__all__ = [
    # Order records
    "ContactInfo",
    "ItemData",
    "OrderData",
    "ORDER_PERSON",
    "UNKNOWN",
    # Processing models
    "RowData",
    "ErrorRecord",
    "ExportResult",
    "PipelineState",
]
