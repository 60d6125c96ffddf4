"""
Storage of extracted receipt items: Timestream for the deployed function,
SQLite for local runs.
"""

import datetime as dt
import logging
import sqlite3
from pathlib import Path
from typing import Dict, List, Sequence

from .models import ReceiptItem

logger = logging.getLogger(__name__)

MEASURE_NAME = "price"


def build_timestream_records(items: Sequence[ReceiptItem], user_id: str,
                             timestamp_ms: str) -> List[Dict]:
    """
    Shape items into Timestream WriteRecords records.

    All records share ``timestamp_ms`` (processing time, not purchase time).
    """
    return [
        {
            "Dimensions": [
                {"Name": "user_id", "Value": user_id},
                {"Name": "item_number", "Value": item.item_number},
                {"Name": "item_name", "Value": item.item_name},
            ],
            "MeasureName": MEASURE_NAME,
            "MeasureValue": str(item.price),
            "MeasureValueType": "DOUBLE",
            "Time": timestamp_ms,
        }
        for item in items
    ]


def write_timestream_records(client, database: str, table: str, records: List[Dict]):
    """
    Write all records in a single WriteRecords call.

    There is no partial retry: if the call fails the whole batch is lost and
    the error propagates to the caller.
    """
    response = client.write_records(
        DatabaseName=database,
        TableName=table,
        Records=records,
    )
    logger.info("Wrote %d record(s) to Timestream %s.%s", len(records), database, table)
    return response


def upsert_sqlite(rows: List[Dict], sqlite_path: Path):
    """
    Save extracted items to a local SQLite database.

    Rows are keyed by their position on the receipt, so an item bought twice
    is stored twice and reprocessing a receipt replaces its rows.
    """
    with sqlite3.connect(sqlite_path.as_posix()) as conn:
        cur = conn.cursor()
        cur.execute("""
        CREATE TABLE IF NOT EXISTS receipt_items (
            id INTEGER PRIMARY KEY,
            user_id TEXT,
            source TEXT,
            line_index INTEGER,
            item_number TEXT,
            item_name TEXT,
            price REAL,
            recorded_at TEXT,
            UNIQUE(user_id, source, line_index)
        )
        """)

        fallback_ts = dt.datetime.now().isoformat()
        data = [(r.get("user_id"), r.get("source"), r.get("line_index"), r.get("item_number"),
                 r.get("item_name"), r.get("price"), r.get("recorded_at") or fallback_ts)
                for r in rows]

        # Drop leftovers from an earlier run that found more items
        receipts = {(r.get("user_id"), r.get("source")) for r in rows}
        cur.executemany("DELETE FROM receipt_items WHERE user_id = ? AND source = ?", receipts)

        cur.executemany("""
        INSERT OR REPLACE INTO receipt_items
        (user_id,source,line_index,item_number,item_name,price,recorded_at)
        VALUES (?,?,?,?,?,?,?)
        """, data)

        conn.commit()


def load_sqlite_rows(sqlite_path: Path) -> List[Dict]:
    """Read back all stored items in receipt order."""
    with sqlite3.connect(sqlite_path.as_posix()) as conn:
        conn.row_factory = sqlite3.Row
        cur = conn.cursor()
        cur.execute("""
            SELECT user_id, line_index, item_number, item_name, price, source, recorded_at
            FROM receipt_items
            ORDER BY user_id, source, line_index
        """)
        return [dict(row) for row in cur.fetchall()]
