"""
Rendering extracted receipts for sharing and export.
"""

import csv
import json
from typing import Dict, List, TextIO

from .models import ReceiptData

CSV_FIELDS = ["source_file", "vendor", "date", "total", "is_valid", "errors", "confidence"]


def format_receipt_for_sharing(data: ReceiptData,
                               footer: str = "Generated by One-Click Receipt") -> str:
    """Render a receipt as a short message for chat or email."""
    vendor = data.vendor or "Unknown Store"
    date = data.date or "Unknown Date"
    total = data.total or "Unknown Amount"

    return (
        "🧾 Receipt Summary\n"
        "\n"
        f"📍 Vendor: {vendor}\n"
        f"📅 Date: {date}\n"
        f"💰 Total: {total}\n"
        "\n"
        f"{footer}"
    )


def write_csv(rows: List[Dict], out: TextIO):
    """Write receipt rows to an open text stream."""
    w = csv.DictWriter(out, fieldnames=CSV_FIELDS, lineterminator="\n")
    w.writeheader()
    for r in rows:
        row = {k: r.get(k) for k in CSV_FIELDS}
        row["errors"] = "; ".join(r.get("errors") or [])
        w.writerow(row)


def rows_to_json(rows: List[Dict]) -> str:
    return json.dumps(rows, indent=2, ensure_ascii=False)
