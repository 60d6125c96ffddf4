"""
Report output for extracted receipt items.
"""

import csv
from pathlib import Path
from typing import Dict, List

from .utils import money_fmt

FIELDNAMES = ["user_id", "line_index", "item_number", "item_name", "price", "source", "recorded_at"]


def write_csv(rows: List[Dict], out_csv: Path):
    """Write extracted items to CSV file."""
    with out_csv.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=FIELDNAMES)
        w.writeheader()
        for r in rows:
            w.writerow({k: r.get(k) for k in FIELDNAMES})


def format_item_table(rows: List[Dict]) -> str:
    """Plain-text table of items for console output."""
    if not rows:
        return ""
    number_w = max(len("ITEM"), *(len(r["item_number"]) for r in rows))
    name_w = max(len("NAME"), *(len(r["item_name"]) for r in rows))
    lines = [f"{'ITEM':<{number_w}}  {'NAME':<{name_w}}  {'PRICE':>10}"]
    for r in rows:
        lines.append(f"{r['item_number']:<{number_w}}  {r['item_name']:<{name_w}}  "
                     f"{money_fmt(r['price']):>10}")
    total = sum(r["price"] for r in rows)
    lines.append(f"{'':<{number_w}}  {'':<{name_w}}  {money_fmt(total):>10}")
    return "\n".join(lines)
