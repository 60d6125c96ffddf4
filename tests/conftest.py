"""Test fixtures and fake AWS clients"""

import pytest
from botocore.exceptions import ClientError

from receipt_analyzer.core.config import Settings
from receipt_analyzer.core.models import S3Location
from receipt_analyzer.core.processor import ReceiptProcessor


def line_block(text):
    return {"BlockType": "LINE", "Text": text}


def client_error(operation, code="AccessDeniedException"):
    return ClientError({"Error": {"Code": code, "Message": "denied"}}, operation)


class FakeTextractClient:
    """Textract stand-in returning fixed blocks"""

    def __init__(self, blocks=None, error=None):
        self.blocks = blocks if blocks is not None else []
        self.error = error
        self.calls = []

    def analyze_document(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return {"Blocks": self.blocks}


class FakeTimestreamClient:
    """Timestream Write stand-in recording each call"""

    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def write_records(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return {"RecordsIngested": {"Total": len(kwargs["Records"])}}


RECEIPT_LINES = [
    "COSTCO WHOLESALE",
    "48757 SPRING MIX",
    "3.89 3",
    "1234 KS WATER",
    "4,99",
    "SUBTOTAL",
    "8.88",
    "TAX",
    "0.00",
    "**** TOTAL",
    "8.88",
]


@pytest.fixture
def settings():
    return Settings(
        timestream_database="costco_receipts",
        timestream_table="receipt_items",
        region="us-east-1",
    )


@pytest.fixture
def receipt_blocks():
    blocks = [{"BlockType": "PAGE"}]
    for text in RECEIPT_LINES:
        blocks.append(line_block(text))
        blocks.append({"BlockType": "WORD", "Text": text.split()[0]})
    return blocks


@pytest.fixture
def textract_client(receipt_blocks):
    return FakeTextractClient(receipt_blocks)


@pytest.fixture
def timestream_client():
    return FakeTimestreamClient()


@pytest.fixture
def processor(settings, textract_client, timestream_client):
    return ReceiptProcessor(settings, textract_client, timestream_client)


@pytest.fixture
def location():
    return S3Location(bucket="receipt-bucket", key="alice/2024/receipt 1.jpg")


@pytest.fixture
def s3_event():
    """S3 ObjectCreated notification as delivered to Lambda"""
    return {
        "Records": [
            {
                "eventSource": "aws:s3",
                "eventName": "ObjectCreated:Put",
                "s3": {
                    "bucket": {"name": "receipt-bucket"},
                    "object": {"key": "alice/2024/receipt+1.jpg", "size": 1024},
                },
            }
        ]
    }
