"""
Receipt Text Pipeline

Deterministic extraction of vendor, date and total from OCR'd receipt text.
"""

__version__ = "1.0.0"
__author__ = "Receipt Text Pipeline Contributors"

from receipt_text_pipeline.core.models import ReceiptData, ValidationResult
from receipt_text_pipeline.core.parsers import extract_date, extract_total, extract_vendor, format_date
from receipt_text_pipeline.core.processor import extract_receipt_data, validate_receipt_data
from receipt_text_pipeline.core.reporting import format_receipt_for_sharing

__all__ = [
    "ReceiptData",
    "ValidationResult",
    "extract_receipt_data",
    "validate_receipt_data",
    "extract_vendor",
    "extract_date",
    "extract_total",
    "format_date",
    "format_receipt_for_sharing",
]
