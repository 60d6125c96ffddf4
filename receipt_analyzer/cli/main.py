#!/usr/bin/env python3
"""
Main CLI entrypoint for receipt analyzer.
"""

import argparse
import logging
import sys
from pathlib import Path

from receipt_analyzer.core.config import Settings
from receipt_analyzer.core.database import upsert_sqlite
from receipt_analyzer.core.errors import ReceiptAnalyzerError
from receipt_analyzer.core.events import parse_s3_uri
from receipt_analyzer.core.processor import ReceiptProcessor
from receipt_analyzer.core.reporting import format_item_table, write_csv
from receipt_analyzer.core.utils import IMAGE_EXTS, PDF_EXTS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract line items from receipt scans and record item prices",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # OCR local receipts with Tesseract and print the items
  receipt-analyzer scans/alice/receipt1.jpg scans/alice/receipt2.pdf

  # Save the items to CSV and a SQLite database
  receipt-analyzer scans/alice/*.jpg --csv items.csv --export-db items.sqlite

  # Run an uploaded receipt through Textract and write it to Timestream
  receipt-analyzer --s3 my-receipt-bucket/alice/receipt1.jpg --write-timestream
        """
    )
    parser.add_argument("files", nargs="*", type=Path,
                        help="Receipt images or PDFs to OCR locally")
    parser.add_argument("--s3", metavar="BUCKET/KEY",
                        help="Process an S3 object with Textract instead of local files")
    parser.add_argument("--user",
                        help="User id for local files (default: the file's parent directory name)")
    parser.add_argument("--csv", type=Path,
                        help="Write extracted items to this CSV file")
    parser.add_argument("--export-db", type=Path, metavar="SQLITE_PATH",
                        help="Also upsert extracted items into a SQLite database")
    parser.add_argument("--write-timestream", action="store_true",
                        help="Write items to Timestream (TIMESTREAM_DATABASE_NAME / TIMESTREAM_TABLE_NAME)")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Show every OCR line and parsing details for debugging")
    return parser


def main(argv=None):
    """Main CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if bool(args.files) == bool(args.s3):
        print("[ERROR] Give either receipt files or --s3 BUCKET/KEY")
        return 1

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="  [%(levelname)s] %(message)s")

    settings = Settings.from_env()
    if args.write_timestream:
        try:
            settings.require_sink()
        except ReceiptAnalyzerError as e:
            print(f"[ERROR] {e}")
            return 1
        print(f"[INFO] Writing to Timestream {settings.timestream_database}.{settings.timestream_table}")

    processor = ReceiptProcessor(settings, write_enabled=args.write_timestream)

    results = []
    failed = 0
    if args.s3:
        try:
            location = parse_s3_uri(args.s3)
        except ReceiptAnalyzerError as e:
            print(f"[ERROR] {e}")
            return 1
        print(f"[INFO] Processing {location} with Textract")
        try:
            results.append(processor.process_s3_object(location))
        except Exception as e:
            print(f"[ERROR] Failed {location}: {e}")
            failed += 1
    else:
        for path in args.files:
            if path.suffix.lower() not in IMAGE_EXTS.union(PDF_EXTS):
                print(f"[WARN] Skipping unsupported file {path}")
                continue
            user_id = args.user or path.resolve().parent.name
            print(f"[INFO] Processing {path.name} (user: {user_id})")
            try:
                results.append(processor.process_file(path, user_id))
            except Exception as e:
                print(f"[ERROR] Failed {path.name}: {e}")
                failed += 1

    rows = []
    for result in results:
        if not result.ok:
            print(f"[WARN] {result.source}: {result.message}")
            continue
        print(f"[OK] {result.source}: {len(result.items)} item(s) from {result.line_count} line(s)")
        table = format_item_table(result.rows())
        if table:
            print(table)
        rows.extend(result.rows())

    if args.csv and rows:
        write_csv(rows, args.csv)
        print(f"[OK] Wrote {args.csv}")

    if args.export_db and rows:
        upsert_sqlite(rows, args.export_db)
        print(f"[OK] Exported to SQLite: {args.export_db}")

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
