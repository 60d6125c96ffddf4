"""
Parsers for extracting line items from receipt text.
"""

import logging
from typing import Iterable, List

from .models import ReceiptItem
from .utils import ITEM_LINE_PATTERN, PRICE_LINE_PATTERN, SUMMARY_KEYWORDS, normalize_price

logger = logging.getLogger(__name__)


def split_lines(text: str) -> List[str]:
    """Split raw OCR text into trimmed, non-empty lines."""
    return [ln.strip() for ln in text.splitlines() if ln.strip()]


def is_summary_line(item_name: str) -> bool:
    """True for TOTAL / SUBTOTAL / TAX rows (case-sensitive substring match)."""
    return any(keyword in item_name for keyword in SUMMARY_KEYWORDS)


def extract_line_items(lines: Iterable[str]) -> List[ReceiptItem]:
    """
    Extract purchased items from receipt lines.

    Each item spans two adjacent lines: ``<item number> <name>`` followed by
    the price, optionally with a single trailing quantity digit::

        48757 SPRING MIX
        3.89 3

    Every adjacent pair is examined, so a price line that completed a match
    is still checked as an item line on the next step.

    Args:
        lines: OCR text lines in reading order, already trimmed

    Returns:
        List of ReceiptItem in input order (empty if nothing matched)
    """
    lines = list(lines)
    items = []

    for current, nxt in zip(lines, lines[1:]):
        item_match = ITEM_LINE_PATTERN.match(current)
        if not item_match:
            continue

        price_match = PRICE_LINE_PATTERN.match(nxt)
        if not price_match:
            continue

        item_number, raw_name = item_match.groups()
        item_name = raw_name.strip()
        if is_summary_line(item_name):
            logger.debug("Skipping summary line: %s", current)
            continue

        item = ReceiptItem(
            item_number=item_number,
            item_name=item_name,
            price=normalize_price(price_match.group(1)),
        )
        items.append(item)
        logger.debug("Extracted item: %s", item)

    return items
