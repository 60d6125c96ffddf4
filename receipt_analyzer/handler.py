"""
AWS Lambda entry point, triggered by receipt uploads to S3.

Handler setting: ``receipt_analyzer.handler.lambda_handler``
"""

import json
import logging

from receipt_analyzer.core.config import Settings
from receipt_analyzer.core.events import parse_s3_event
from receipt_analyzer.core.processor import ReceiptProcessor

logger = logging.getLogger(__name__)

# Reused across warm invocations
_processor = None


def get_processor() -> ReceiptProcessor:
    """Get or create the process-wide receipt processor."""
    global _processor
    if _processor is None:
        settings = Settings.from_env()
        logging.getLogger().setLevel(settings.log_level)
        _processor = ReceiptProcessor(settings)
    return _processor


def lambda_handler(event, context):
    """Process one uploaded receipt and return a status/body response."""
    processor = get_processor()
    try:
        logger.debug("Processing event: %s", json.dumps(event, indent=2, default=str))
        location = parse_s3_event(event)
        result = processor.process_s3_object(location)
    except Exception:
        logger.exception("Error processing receipt")
        raise

    logger.info("Processed %s: %s (%d item(s))", result.source, result.message, len(result.items))
    return result.to_response()
