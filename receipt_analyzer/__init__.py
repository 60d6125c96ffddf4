"""
Receipt Analyzer

Extracts line items from scanned receipts with OCR and records each
item price as a time-series measurement per user.
"""

__version__ = "1.0.0"
__author__ = "Receipt Analyzer Contributors"

from receipt_analyzer.core.models import ReceiptItem
from receipt_analyzer.core.parsers import extract_line_items

__all__ = ["ReceiptItem", "extract_line_items"]
