"""
Data models for receipt processing.
"""

import datetime as dt
import json
from dataclasses import dataclass, asdict, field
from typing import List, Optional


@dataclass(frozen=True)
class ReceiptItem:
    """A single purchased item read off a receipt."""
    item_number: str
    item_name: str
    price: float

    def to_dict(self):
        """Convert to dictionary."""
        return asdict(self)

    def to_json_dict(self):
        """Key names used in the function's JSON response."""
        return {
            "itemNumber": self.item_number,
            "itemName": self.item_name,
            "price": self.price,
        }


@dataclass(frozen=True)
class S3Location:
    """Bucket and (decoded) object key of an uploaded receipt."""
    bucket: str
    key: str

    @property
    def user_id(self) -> str:
        """Receipts are uploaded under ``<user_id>/...``."""
        return self.key.split("/")[0]

    def __str__(self):
        return f"{self.bucket}/{self.key}"


@dataclass
class ProcessingResult:
    """Outcome of processing one receipt document."""
    status_code: int
    message: str
    user_id: str
    source: str
    items: List[ReceiptItem] = field(default_factory=list)
    line_count: int = 0
    recorded_at: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status_code == 200

    def rows(self) -> List[dict]:
        """Flatten items into rows for CSV / SQLite export."""
        recorded_at = None
        if self.recorded_at:
            recorded_at = dt.datetime.fromtimestamp(
                int(self.recorded_at) / 1000, tz=dt.timezone.utc).isoformat()
        return [
            {
                "user_id": self.user_id,
                "line_index": index,
                **item.to_dict(),
                "source": self.source,
                "recorded_at": recorded_at,
            }
            for index, item in enumerate(self.items)
        ]

    def to_response(self) -> dict:
        """Lambda proxy-style response."""
        body = {"message": self.message}
        if self.ok:
            body["itemCount"] = len(self.items)
            body["items"] = [item.to_json_dict() for item in self.items]
        return {"statusCode": self.status_code, "body": json.dumps(body)}
