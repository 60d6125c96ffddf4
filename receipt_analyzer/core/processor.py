"""
Main receipt processing orchestration.
"""

import logging
from pathlib import Path
from typing import List, Optional

from .config import Settings
from .database import build_timestream_records, write_timestream_records
from .models import ProcessingResult, ReceiptItem, S3Location
from .ocr import get_aws_client, local_file_lines, textract_lines
from .parsers import extract_line_items
from .utils import now_millis

logger = logging.getLogger(__name__)

NO_TEXT_MESSAGE = "No text found in document"
SUCCESS_MESSAGE = "Receipt processed successfully"


class ReceiptProcessor:
    """OCR a receipt, extract its line items and record their prices."""

    def __init__(self, settings: Settings,
                 textract_client=None,
                 timestream_client=None,
                 write_enabled: bool = True):
        """
        Initialize receipt processor.

        Args:
            settings: Sink target and AWS region
            textract_client: boto3 Textract client (created lazily if not given)
            timestream_client: boto3 Timestream Write client (created lazily if not given)
            write_enabled: Whether extracted items are written to Timestream
        """
        self.settings = settings
        self._textract_client = textract_client
        self._timestream_client = timestream_client
        self.write_enabled = write_enabled

    @property
    def textract_client(self):
        if self._textract_client is None:
            self._textract_client = get_aws_client("textract", self.settings.region)
        return self._textract_client

    @property
    def timestream_client(self):
        if self._timestream_client is None:
            self._timestream_client = get_aws_client("timestream-write", self.settings.region)
        return self._timestream_client

    def process_s3_object(self, location: S3Location) -> ProcessingResult:
        """Process a receipt uploaded to S3 using Textract."""
        logger.info("Processing receipt for user %s from %s", location.user_id, location)
        lines = textract_lines(self.textract_client, location)
        return self.process_lines(lines, location.user_id, source=str(location))

    def process_file(self, path: Path, user_id: str) -> ProcessingResult:
        """Process a receipt file on disk using local OCR."""
        logger.info("Processing receipt for user %s from %s", user_id, path)
        lines = local_file_lines(path)
        return self.process_lines(lines, user_id, source=path.name)

    def process_lines(self, lines: List[str], user_id: str, source: str) -> ProcessingResult:
        """
        Extract items from OCR lines and record them.

        An empty line list is reported as a 400 result, not raised. Finding
        lines but no items is a successful result with no items.
        """
        if not lines:
            logger.info("No text lines found in %s", source)
            return ProcessingResult(status_code=400, message=NO_TEXT_MESSAGE,
                                    user_id=user_id, source=source)

        for line in lines:
            logger.debug("Found line: %s", line)

        items = extract_line_items(lines)
        recorded_at = now_millis()
        logger.info("Extracted %d item(s) from %d line(s)", len(items), len(lines))

        if not items:
            logger.info("No items were extracted from the receipt")
        elif self.write_enabled:
            self.save_items(items, user_id, recorded_at)

        return ProcessingResult(
            status_code=200,
            message=SUCCESS_MESSAGE,
            user_id=user_id,
            source=source,
            items=items,
            line_count=len(lines),
            recorded_at=recorded_at,
        )

    def save_items(self, items: List[ReceiptItem], user_id: str,
                   timestamp_ms: Optional[str] = None):
        """Write items to Timestream as one batch."""
        self.settings.require_sink()
        records = build_timestream_records(items, user_id, timestamp_ms or now_millis())
        write_timestream_records(
            self.timestream_client,
            self.settings.timestream_database,
            self.settings.timestream_table,
            records,
        )
        logger.info("Successfully saved items to Timestream")
