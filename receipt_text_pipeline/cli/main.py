#!/usr/bin/env python3
"""
Main CLI entrypoint for receipt text extraction.
"""

import argparse
import os
import sys
from pathlib import Path

from receipt_text_pipeline.core.models import ReceiptData
from receipt_text_pipeline.core.ocr import clean_ocr_text
from receipt_text_pipeline.core.processor import DEFAULT_MIN_CONFIDENCE, ReceiptProcessor, log
from receipt_text_pipeline.core.reporting import format_receipt_for_sharing, rows_to_json, write_csv

OUTPUT_FORMATS = ["json", "share", "csv"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="receipt-extract",
        description="Extract vendor, date and total from OCR'd receipt text",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Extract from a text file
  receipt-extract receipt.txt

  # Every .txt/.json/.pdf receipt in a folder, as CSV
  receipt-extract ./scans --format csv

  # Pipe OCR output in and print a shareable summary
  tesseract photo.jpg - | receipt-extract --format share
        """
    )
    parser.add_argument("paths", nargs="*",
                        help="Receipt files or folders (.txt, .json Vision response, .pdf). "
                             "Reads stdin when omitted or '-'")
    parser.add_argument("--format", dest="output_format", choices=OUTPUT_FORMATS,
                        help="Output format (default: json, or RECEIPT_OUTPUT_FORMAT env var)")
    parser.add_argument("--min-confidence", type=float,
                        help="Warn when OCR confidence is below this "
                             f"(default: {DEFAULT_MIN_CONFIDENCE}, or RECEIPT_MIN_CONFIDENCE env var)")
    parser.add_argument("--strict", action="store_true",
                        help="Exit with status 2 if any receipt is missing a field")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Show detailed parsing information for debugging")
    return parser


def render(rows, output_format: str) -> str:
    if output_format == "json":
        return rows_to_json(rows)
    if output_format == "share":
        summaries = [
            format_receipt_for_sharing(ReceiptData(r["vendor"], r["date"], r["total"], None))
            for r in rows
        ]
        return "\n\n".join(summaries)

    write_csv(rows, sys.stdout)
    return ""


def main(argv=None):
    """Main CLI entrypoint."""
    args = build_parser().parse_args(argv)

    # Resolve settings from CLI args or environment variables
    output_format = args.output_format or os.getenv("RECEIPT_OUTPUT_FORMAT", "json")
    if output_format not in OUTPUT_FORMATS:
        log(f"[ERROR] Invalid output format: {output_format}")
        log(f"[ERROR] Must be one of: {', '.join(OUTPUT_FORMATS)}")
        return 1

    min_confidence = args.min_confidence
    if min_confidence is None:
        env_value = os.getenv("RECEIPT_MIN_CONFIDENCE")
        try:
            min_confidence = float(env_value) if env_value else DEFAULT_MIN_CONFIDENCE
        except ValueError:
            log(f"[ERROR] Invalid RECEIPT_MIN_CONFIDENCE: {env_value}")
            return 1

    file_paths = [Path(p) for p in args.paths if p != "-"]
    read_stdin = not args.paths or "-" in args.paths

    processor = ReceiptProcessor(file_paths, verbose=args.verbose,
                                 min_confidence=min_confidence)

    rows = []
    if read_stdin:
        rows.append(processor.process_text(clean_ocr_text(sys.stdin.read())))
    if file_paths:
        rows.extend(processor.process_all())

    output = render(rows, output_format)
    if output:
        print(output)

    if args.strict and any(not r["is_valid"] for r in rows):
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
