"""OCR module tests (Textract response handling and local file dispatch)"""

from pathlib import Path
from unittest.mock import patch

import pytest

from receipt_analyzer.core import ocr
from receipt_analyzer.core.models import S3Location
from tests.conftest import FakeTextractClient, client_error, line_block


class TestLinesFromBlocks:

    def test_only_line_blocks(self, receipt_blocks):
        lines = ocr.lines_from_blocks(receipt_blocks)
        assert lines[:3] == ["COSTCO WHOLESALE", "48757 SPRING MIX", "3.89 3"]
        assert len(lines) == 11

    def test_text_trimmed_and_empty_skipped(self):
        blocks = [line_block("  48757 SPRING MIX "), line_block(""), {"BlockType": "LINE"}]
        assert ocr.lines_from_blocks(blocks) == ["48757 SPRING MIX"]

    def test_no_blocks(self):
        assert ocr.lines_from_blocks([]) == []
        assert ocr.lines_from_blocks(None) == []


class TestTextractLines:

    def test_analyze_document_request(self, textract_client):
        location = S3Location("receipt-bucket", "alice/receipt 1.jpg")
        lines = ocr.textract_lines(textract_client, location)

        assert textract_client.calls == [{
            "Document": {"S3Object": {"Bucket": "receipt-bucket", "Name": "alice/receipt 1.jpg"}},
            "FeatureTypes": ["FORMS", "TABLES"],
        }]
        assert "48757 SPRING MIX" in lines

    def test_response_without_blocks(self):
        client = FakeTextractClient()
        client.blocks = None
        assert ocr.textract_lines(client, S3Location("b", "k")) == []

    def test_client_error_propagates(self):
        client = FakeTextractClient(error=client_error("AnalyzeDocument"))
        with pytest.raises(Exception, match="AccessDenied"):
            ocr.textract_lines(client, S3Location("b", "k"))


class TestGetAwsClient:

    def test_client_cached_per_service_and_region(self, monkeypatch):
        monkeypatch.setattr(ocr, "_clients", {})
        with patch("boto3.client", side_effect=lambda service, region_name=None: object()) as mock_client:
            first = ocr.get_aws_client("textract", "us-east-1")
            again = ocr.get_aws_client("textract", "us-east-1")
            other = ocr.get_aws_client("timestream-write", "us-east-1")

        assert first is again
        assert other is not first
        assert mock_client.call_count == 2


class TestLocalFileLines:

    def test_image_uses_tesseract(self, monkeypatch):
        monkeypatch.setattr(ocr, "ocr_image_to_text", lambda p: "48757 SPRING MIX\n\n 3.89 3 \n")
        assert ocr.local_file_lines(Path("scan.JPG")) == ["48757 SPRING MIX", "3.89 3"]

    def test_pdf_uses_text_layer(self, monkeypatch):
        monkeypatch.setattr(ocr, "pdf_to_text", lambda p: "1234 KS WATER\n4.99")
        assert ocr.local_file_lines(Path("scan.pdf")) == ["1234 KS WATER", "4.99"]

    def test_unsupported_extension(self):
        with pytest.raises(ValueError, match="Unsupported file type"):
            ocr.local_file_lines(Path("notes.txt"))

    def test_ocr_image_grayscale(self, tmp_path, monkeypatch):
        from PIL import Image

        img_path = tmp_path / "receipt.png"
        Image.new("RGB", (20, 20), color="white").save(img_path)

        seen = {}

        class FakeTesseract:
            @staticmethod
            def image_to_string(img):
                seen["mode"] = img.mode
                return "48757 SPRING MIX"

        monkeypatch.setattr(ocr, "pytesseract", FakeTesseract)
        monkeypatch.setattr(ocr, "PIL_Image", Image)
        assert ocr.ocr_image_to_text(img_path) == "48757 SPRING MIX"
        assert seen["mode"] == "L"
