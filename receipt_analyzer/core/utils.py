"""
Utility functions and constants for receipt processing.
"""

import re
import time
import urllib.parse
from typing import Optional

# File type constants
IMAGE_EXTS = {".png", ".jpg", ".jpeg", ".tif", ".tiff", ".bmp", ".webp"}
PDF_EXTS = {".pdf"}

# Pattern constants for parsing
ITEM_LINE_PATTERN = re.compile(r"^(\d+)\s+(.+)$", re.ASCII)        # 48757 SPRING MIX
PRICE_LINE_PATTERN = re.compile(r"^(\d+[.,]\d{2})\s*\d?$", re.ASCII)  # 3.89 or 3,89 3 (trailing quantity)

# Summary rows that look like items but are not
SUMMARY_KEYWORDS = ("TOTAL", "SUBTOTAL", "TAX")


def normalize_price(s: str) -> Optional[float]:
    """Normalize a ``3.89`` / ``3,89`` price string to float."""
    if not s:
        return None
    try:
        return float(s.replace(",", ".", 1))
    except ValueError:
        return None


def decode_s3_key(raw_key: str) -> str:
    """S3 event keys are URL-encoded with ``+`` for spaces."""
    return urllib.parse.unquote_plus(raw_key)


def now_millis() -> str:
    """Current time as epoch milliseconds, string-encoded."""
    return str(int(time.time() * 1000))


def money_fmt(v: Optional[float]) -> str:
    """Format amount as currency."""
    return f"${v:,.2f}" if v is not None else ""
