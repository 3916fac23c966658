"""
Utility functions and constants for receipt text processing.
"""

import re
import datetime as dt
from typing import List, Optional

# File type constants
TEXT_EXTS = {".txt"}
VISION_EXTS = {".json"}
PDF_EXTS = {".pdf"}
IMAGE_EXTS = {".png", ".jpg", ".jpeg", ".tif", ".tiff", ".bmp", ".webp", ".heic"}

# Month names (full and 3-letter) to their 2-digit number
MONTHS = {
    "jan": "01", "january": "01",
    "feb": "02", "february": "02",
    "mar": "03", "march": "03",
    "apr": "04", "april": "04",
    "may": "05",
    "jun": "06", "june": "06",
    "jul": "07", "july": "07",
    "aug": "08", "august": "08",
    "sep": "09", "september": "09",
    "oct": "10", "october": "10",
    "nov": "11", "november": "11",
    "dec": "12", "december": "12",
}

# Longest names first so "june" is not read as "jun" + "e"
MONTH_NAME_RE = re.compile(
    r"\b(" + "|".join(sorted(MONTHS, key=len, reverse=True)) + r")\b",
    flags=re.IGNORECASE,
)


def normalize_lines(text: Optional[str]) -> List[str]:
    """Split text into trimmed, non-empty lines, keeping their order."""
    if not text:
        return []
    return [ln.strip() for ln in text.splitlines() if ln.strip()]


def title_case(s: str) -> str:
    """Upper-case the first character of each word and lower-case the rest.

    Unlike ``str.title`` this leaves letters after an apostrophe alone, so
    ``"McDONALD'S"`` becomes ``"Mcdonald's"``.
    """
    return " ".join(w[:1].upper() + w[1:].lower() for w in s.split(" "))


def normalize_amount(s: str) -> Optional[float]:
    """Normalize amount string to float."""
    if not s:
        return None
    s = re.sub(r"[,\s]", "", s)
    try:
        return float(s)
    except ValueError:
        return None


def expand_two_digit_year(yy: str, today: Optional[dt.date] = None) -> str:
    """Expand a 2-digit year into the current century (24 -> 2024)."""
    today = today or dt.date.today()
    century = (today.year // 100) * 100
    return str(century + int(yy))


def format_dmy(day: dt.date) -> str:
    """Format a date as DD/MM/YYYY."""
    return day.strftime("%d/%m/%Y")
