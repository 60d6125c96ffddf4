"""
OCR functionality: AWS Textract for uploaded receipts, Tesseract/PyMuPDF
for receipt files on disk.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .models import S3Location
from .parsers import split_lines
from .utils import IMAGE_EXTS, PDF_EXTS

logger = logging.getLogger(__name__)

TEXTRACT_FEATURES = ["FORMS", "TABLES"]

# Lazy import clients
_clients = {}


def _lazy_import_ocr_deps():
    """Lazy import heavy local OCR dependencies."""
    global pytesseract, PIL_Image, fitz
    import importlib
    pytesseract = importlib.import_module("pytesseract")
    PIL_Image = importlib.import_module("PIL.Image")
    fitz = importlib.import_module("fitz")  # pymupdf


# Initialize on first use
pytesseract = None
PIL_Image = None
fitz = None


def get_aws_client(service: str, region: Optional[str] = None):
    """Get or create a boto3 client for ``service`` (one per process and region)."""
    cache_key = (service, region)
    if cache_key not in _clients:
        import boto3
        _clients[cache_key] = boto3.client(service, region_name=region)
    return _clients[cache_key]


def lines_from_blocks(blocks: Iterable[Dict]) -> List[str]:
    """Text of the LINE blocks of a Textract response, in response order."""
    lines = []
    for block in blocks or []:
        if block.get("BlockType") == "LINE" and block.get("Text"):
            lines.append(block["Text"].strip())
    return lines


def textract_lines(client, location: S3Location) -> List[str]:
    """
    Run Textract AnalyzeDocument on an S3 object and return its text lines.

    Client errors are not caught; a failed OCR call fails the invocation.
    """
    response = client.analyze_document(
        Document={"S3Object": {"Bucket": location.bucket, "Name": location.key}},
        FeatureTypes=TEXTRACT_FEATURES,
    )
    lines = lines_from_blocks(response.get("Blocks", []))
    logger.info("Found %d lines of text in %s", len(lines), location)
    return lines


def ocr_image_to_text(img_path: Path) -> str:
    """OCR an image file to text."""
    if pytesseract is None:
        _lazy_import_ocr_deps()

    img = PIL_Image.open(img_path)
    # Improve OCR: convert to grayscale
    if img.mode != "L":
        img = img.convert("L")
    return pytesseract.image_to_string(img)


def pdf_to_text(pdf_path: Path) -> str:
    """Extract text from a searchable PDF using PyMuPDF."""
    if fitz is None:
        _lazy_import_ocr_deps()

    doc = fitz.open(pdf_path.as_posix())
    chunks = []
    for page in doc:
        chunks.append(page.get_text())
    doc.close()
    return "\n".join(chunks)


def local_file_lines(path: Path) -> List[str]:
    """
    OCR a receipt file (image or PDF) on disk into trimmed text lines.

    Raises:
        ValueError: for unsupported file types
    """
    ext = path.suffix.lower()
    if ext in IMAGE_EXTS:
        text = ocr_image_to_text(path)
    elif ext in PDF_EXTS:
        text = pdf_to_text(path)
    else:
        raise ValueError(f"Unsupported file type: {path}")
    return split_lines(text)
