"""
Receipt extraction orchestration.
"""

import sys
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .models import ReceiptData, ValidationResult
from .ocr import load_receipt_text
from .parsers import extract_date, extract_total, extract_vendor
from .utils import IMAGE_EXTS, PDF_EXTS, TEXT_EXTS, VISION_EXTS

SUPPORTED_EXTS = TEXT_EXTS | VISION_EXTS | PDF_EXTS

DEFAULT_MIN_CONFIDENCE = 0.7


def extract_receipt_data(text: Optional[str]) -> ReceiptData:
    """
    Extract vendor, date and total from OCR text.

    The three extractors read the same trimmed text and do not depend on
    each other; a field that cannot be found is None.
    """
    if not text:
        return ReceiptData(vendor=None, date=None, total=None, raw_text=text)

    clean_text = text.strip()
    return ReceiptData(
        vendor=extract_vendor(clean_text),
        date=extract_date(clean_text),
        total=extract_total(clean_text),
        raw_text=clean_text,
    )


def validate_receipt_data(data: ReceiptData) -> ValidationResult:
    """Report which fields are missing, in vendor/date/total order."""
    errors = []
    if not data.vendor:
        errors.append("Vendor name not found")
    if not data.date:
        errors.append("Date not found")
    if not data.total:
        errors.append("Total amount not found")
    return ValidationResult(is_valid=not errors, errors=errors)


def log(message: str):
    """Status lines go to stderr so stdout only carries results."""
    print(message, file=sys.stderr)


class ReceiptProcessor:
    """Runs extraction over a batch of receipt text files."""

    def __init__(self, paths: Iterable[Path], verbose: bool = False,
                 min_confidence: float = DEFAULT_MIN_CONFIDENCE):
        """
        Initialize receipt processor.

        Args:
            paths: Files or directories to process
            verbose: Whether to show per-field debugging output
            min_confidence: OCR confidence below which a warning is printed
        """
        self.paths = [Path(p) for p in paths]
        self.verbose = verbose
        self.min_confidence = min_confidence

    def discover_files(self) -> List[Path]:
        """Expand directories into the supported receipt files they contain."""
        files = []
        for path in self.paths:
            if path.is_dir():
                found = sorted(p for p in path.iterdir()
                               if p.is_file() and p.suffix.lower() in SUPPORTED_EXTS)
                skipped = [p for p in path.iterdir() if p.suffix.lower() in IMAGE_EXTS]
                if skipped:
                    log(f"[WARN] Skipping {len(skipped)} image(s) in {path}: "
                        f"run OCR first and pass the text or Vision JSON")
                files.extend(found)
            else:
                files.append(path)

        log(f"[INFO] Found {len(files)} receipt file(s)")
        return files

    def process_text(self, text: Optional[str], source: str = "<stdin>",
                     confidence: Optional[float] = None) -> Dict:
        """Extract and validate one receipt's text, returning a report row."""
        data = extract_receipt_data(text)
        result = validate_receipt_data(data)

        if confidence is not None and confidence < self.min_confidence:
            log(f"  [WARN] {source}: low OCR confidence ({confidence:.2f}), "
                f"fields may be unreliable")

        if self.verbose:
            log(f"  [DEBUG] Vendor: '{data.vendor or '(none)'}'")
            log(f"  [DEBUG] Date: {data.date or '(none)'}")
            log(f"  [DEBUG] Total: {data.total or '(none)'}")
            if not data.vendor and data.raw_text:
                log("  [DEBUG] First 5 lines of OCR text:")
                for i, line in enumerate(data.raw_text.splitlines()[:5], 1):
                    log(f"    {i}: {line[:80]}")
            for err in result.errors:
                log(f"  [WARN] {err}")

        return {
            "source_file": source,
            "vendor": data.vendor,
            "date": data.date,
            "total": data.total,
            "is_valid": result.is_valid,
            "errors": result.errors,
            "confidence": confidence,
        }

    def process_file(self, path: Path) -> Dict:
        """Load one receipt file and extract its fields."""
        log(f"[INFO] Processing {path.name}")
        text, ocr_result = load_receipt_text(path)
        confidence = ocr_result.confidence if ocr_result else None
        return self.process_text(text, source=path.name, confidence=confidence)

    def process_all(self) -> List[Dict]:
        """Process every discovered file, skipping the ones that fail."""
        files = self.discover_files()
        if not files:
            log("No receipt files found.")
            return []

        rows = []
        for file_path in files:
            try:
                rows.append(self.process_file(file_path))
            except Exception as e:
                log(f"[ERROR] Failed {file_path.name}: {e}")

        incomplete = sum(1 for r in rows if not r["is_valid"])
        if incomplete:
            log(f"[WARN] {incomplete} of {len(rows)} receipt(s) are missing fields")
        else:
            log(f"[OK] Extracted {len(rows)} receipt(s)")
        return rows
