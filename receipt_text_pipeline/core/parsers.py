"""
Parsers for extracting vendor, date and total from receipt text.
"""

import re
import datetime as dt
from collections import namedtuple
from typing import List, Optional

from .models import AmountCandidate, DateCandidate
from .utils import (MONTHS, MONTH_NAME_RE, expand_two_digit_year, format_dmy,
                    normalize_amount, normalize_lines, title_case)
from .vendors import KNOWN_VENDORS, KnownVendor

# ---------------------------------------------------------------------------
# Vendor
# ---------------------------------------------------------------------------

# Lines that are receipt metadata rather than a business name
BUSINESS_SKIP_PATTERNS = [
    re.compile(r"^\d+[\s-]*\d+[\s-]*\d+"),                 # Phone numbers
    re.compile(r"tax\s*invoice|receipt|bill", re.I),       # Document types
    re.compile(r"take\s*away|quick\s*sale", re.I),         # Service types
    re.compile(r"till|cashier|invoice\s*#|salesperson", re.I),
    re.compile(r"^\d+:\d+"),                               # Time stamps
    re.compile(r"\d{6,}"),                                 # Long numbers
    re.compile(r"gst|abn|phone|ph:", re.I),
]

BUSINESS_WORDS_RE = re.compile(
    r"bistro|box|departures|restaurant|cafe|market|store|shop|hotel|bar|grill",
    re.I,
)

VENDOR_SKIP_PATTERNS = [
    re.compile(r"^\d+[\s-]*\d+[\s-]*\d+"),                 # Phone numbers
    re.compile(r"\d{6,}"),                                 # Phone / ID numbers
    re.compile(r"@"),                                      # Email
    re.compile(r"www\.|\.com|\.in"),                       # Websites
    re.compile(r"address|add:|addr:", re.I),
    re.compile(r"phone|ph:|tel:|mobile|mob:", re.I),
    re.compile(r"gstin|gst|tin|pan", re.I),                # Tax numbers
    re.compile(r"bill|receipt|invoice", re.I),
    re.compile(r"date|time", re.I),
    re.compile(r"total|amount|₹|rs", re.I),
]

HAS_LETTER_RE = re.compile(r"[a-zA-Z]")


def is_likely_business_name(line: str) -> bool:
    """Strict check used on the first lines of a receipt."""
    if not line or len(line) < 3:
        return False

    if any(p.search(line) for p in BUSINESS_SKIP_PATTERNS):
        return False

    if not HAS_LETTER_RE.search(line) or len(line) > 40:
        return False

    if BUSINESS_WORDS_RE.search(line):
        return True

    # Short multi-word lines are usually the store name
    words = line.split()
    return 2 <= len(words) <= 5


def is_likely_vendor_name(line: str) -> bool:
    """Looser check used once the lexicon has found nothing."""
    if not line or len(line) < 2:
        return False

    if any(p.search(line) for p in VENDOR_SKIP_PATTERNS):
        return False

    return bool(HAS_LETTER_RE.search(line)) and len(line) <= 50


def format_vendor_name(name: str) -> str:
    """Drop stray symbols (keeping & ' -) and title-case the result."""
    cleaned = re.sub(r"[^\w\s&'-]", "", name.strip()).strip()
    return title_case(cleaned)


def _leading_brand(line: str) -> Optional[KnownVendor]:
    """
    Longest known chain name the line starts with, if any.

    Only applies when the rest of the line carries no business keyword, so
    "Costa Rica Grill" stays a line of its own.
    """
    lower = re.sub(r"[^\w\s&'-]", "", line).strip().lower()
    best = None
    for vendor in KNOWN_VENDORS:
        if not vendor.is_brand:
            continue
        if re.match(re.escape(vendor.name) + r"(?![\w'])", lower):
            if best is None or len(vendor.name) > len(best.name):
                best = vendor
    if best is None or BUSINESS_WORDS_RE.search(lower[len(best.name):]):
        return None
    return best


def match_known_vendor(text: str) -> Optional[str]:
    """
    Look the text up in the known vendor lexicon.

    A verbatim (case-insensitive) hit on any entry wins first. Failing that, a
    multi-word entry counts as found when any of its words longer than three
    characters appears, which tolerates OCR damage to the other words.
    """
    text_lower = text.lower()

    for vendor in KNOWN_VENDORS:
        if vendor.name in text_lower:
            return title_case(vendor.name)

    for vendor in KNOWN_VENDORS:
        if len(vendor.words) < 2:
            continue
        if any(len(w) > 3 and w in text_lower for w in vendor.words):
            return title_case(vendor.name)

    return None


def extract_vendor(text: str) -> Optional[str]:
    """
    Extract the vendor name from receipt text.

    Tries, in order: a business-looking line among the first five, the known
    vendor lexicon over the whole text, then a looser filter over the first
    four lines.

    Returns:
        Title-cased vendor name or None
    """
    lines = normalize_lines(text)
    if not lines:
        return None

    for ln in lines[:5]:
        if is_likely_business_name(ln):
            brand = _leading_brand(ln)
            if brand:
                return title_case(brand.name)
            return format_vendor_name(ln)

    known = match_known_vendor(text)
    if known:
        return known

    for ln in lines[:4]:
        if is_likely_vendor_name(ln):
            return format_vendor_name(ln)

    return None


# ---------------------------------------------------------------------------
# Date
# ---------------------------------------------------------------------------

_MON = r"(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)"
_MONTH = (r"(?:january|february|march|april|may|june|july|august|september"
          r"|october|november|december)")
_NUMERIC_DMY = r"\d{1,2}[/\-.]\d{1,2}[/\-.]\d{4}"

# Group 1 of every pattern is the date itself
DATE_PATTERNS = [
    # Time followed by date ("12:26 PM 3 Jul 24")
    re.compile(r"\d{1,2}:\d{2}(?:\s*[ap]m)?\s+(\d{1,2}\s+" + _MON + r"\s+\d{2,4})", re.I),
    # DD Month YY(YY), full and abbreviated
    re.compile(r"(\d{1,2}\s+" + _MONTH + r"\s+\d{2,4})", re.I),
    re.compile(r"(\d{1,2}\s+" + _MON + r"\s+\d{2,4})", re.I),
    # DD/MM/YYYY, DD-MM-YYYY, DD.MM.YYYY with optional labels
    re.compile(r"(?:date[:\s]*|bill\s*date[:\s]*|transaction[:\s]*date[:\s]*)?(" + _NUMERIC_DMY + ")", re.I),
    # MM/DD/YYYY variants
    re.compile(r"(?:date[:\s]*)?(" + _NUMERIC_DMY + ")", re.I),
    # YYYY-MM-DD, YYYY/MM/DD, YYYY.MM.DD
    re.compile(r"(?:date[:\s]*)?(\d{4}[/\-.]\d{1,2}[/\-.]\d{1,2})", re.I),
    # Month DD, YYYY
    re.compile(r"(?:date[:\s]*)?(" + _MONTH + r"\s+\d{1,2},?\s+\d{4})", re.I),
    # DD-Mon-YYYY
    re.compile(r"(?:date[:\s]*)?(\d{1,2}[-/]\s*" + _MON + r"[-/]\s*\d{4})", re.I),
    # Date followed by time
    re.compile(r"(" + _NUMERIC_DMY + r")\s+\d{1,2}:\d{2}(?::\d{2})?(?:\s*[ap]m)?", re.I),
]

TODAY_RE = re.compile(r"(?:today|now|current)\s*(?:date)?", re.I)


def score_date(date_str: str) -> int:
    """Confidence score for a matched date string."""
    score = 1
    if re.search(r"[/\-.]", date_str):
        score += 2
    if re.search(r"\d{4}", date_str):
        score += 2
    if re.search(_NUMERIC_DMY, date_str):
        score += 3
    return score


def find_date_candidates(text: str) -> List[DateCandidate]:
    """Every match of every date pattern, scored, in pattern order."""
    candidates = []
    for pat in DATE_PATTERNS:
        for m in pat.finditer(text):
            date_str = m.group(1).strip()
            candidates.append(DateCandidate(date_str, score_date(date_str)))
    return candidates


def format_date(date_str: str, today: Optional[dt.date] = None) -> str:
    """
    Normalize a matched date string to DD/MM/YYYY.

    Best effort: anything that cannot be read as day, month and year comes
    back unchanged.
    """
    try:
        normalized = re.sub(r"[-.]", "/", date_str).strip()
        month_first = normalized[:1].isalpha()
        normalized = MONTH_NAME_RE.sub(lambda m: MONTHS[m.group(1).lower()], normalized)

        parts = [p for p in re.split(r"[/\s,]+", normalized) if p]
        if len(parts) < 3:
            return date_str

        # Year-first and month-name-first inputs are reordered to day/month/year
        if len(parts[0]) == 4:
            year, month, day = parts[:3]
        elif month_first:
            month, day, year = parts[:3]
        else:
            day, month, year = parts[:3]

        if not (day.isdigit() and month.isdigit() and year.isdigit()):
            return date_str

        # Month above 12 means the receipt printed MM/DD; the raw match
        # would otherwise come back as an impossible DD/MM date
        if int(month) > 12 and int(day) <= 12:
            day, month = month, day

        if len(year) == 2:
            year = expand_two_digit_year(year, today)

        return f"{day.zfill(2)}/{month.zfill(2)}/{year}"
    except (ValueError, IndexError, KeyError):
        return date_str


def extract_date(text: str, today: Optional[dt.date] = None) -> Optional[str]:
    """
    Extract the transaction date from receipt text.

    Args:
        text: Receipt text
        today: Date used for "today" receipts and 2-digit years (defaults to today)

    Returns:
        Date as DD/MM/YYYY (or the raw match when it cannot be normalized), or None
    """
    best = None
    for cand in find_date_candidates(text):
        if best is None or cand.score > best.score:
            best = cand

    if best is not None:
        return format_date(best.text, today)

    if TODAY_RE.search(text):
        return format_dmy(today or dt.date.today())

    return None


# ---------------------------------------------------------------------------
# Total
# ---------------------------------------------------------------------------

AmountTier = namedtuple("AmountTier", ["pattern", "priority"])

_AMOUNT = r"(\d+(?:[, ]\d+)*(?:\.\d{2})?)"

# Group 1 of every pattern is the amount
AMOUNT_TIERS = [
    # Balance due, total, amount payable with optional $
    AmountTier(re.compile(
        r"(?:balance\s*due|(?:grand\s*)?total|net\s*(?:amount|total)|final\s*(?:amount|total)"
        r"|amount\s*payable|tendered)[:\s]*\$?\s*" + _AMOUNT, re.I), 10),
    # Dollar sign (US/AUD/CAD)
    AmountTier(re.compile(r"\$\s*" + _AMOUNT, re.I), 9),
    # Total with currency symbol
    AmountTier(re.compile(r"(?:total)[:\s]*[$₹]\s*" + _AMOUNT, re.I), 8),
    # Amount due/payable with rupees
    AmountTier(re.compile(r"(?:amount\s*(?:due|payable)|balance\s*due)[:\s]*₹?\s*" + _AMOUNT, re.I), 7),
    # Currency first, then total indicators
    AmountTier(re.compile(r"[$₹]\s*" + _AMOUNT + r"\s*(?:total|amount|due)?", re.I), 6),
    # Rs/Rupees variations
    AmountTier(re.compile(r"(?:rs\.?|rupees|inr)[:\s]*" + _AMOUNT + r"\s*(?:total|amount)?", re.I), 5),
    # Numbers followed by currency
    AmountTier(re.compile(_AMOUNT + r"\s*(?:[$₹]|rs\.?|rupees|inr|aud|usd)", re.I), 4),
    # Any number with 2+ digits
    AmountTier(re.compile(r"(\d{2,}(?:[, ]\d+)*(?:\.\d{2})?)", re.I), 1),
]

DOLLAR_HINT_RE = re.compile(r"aud|usd|cad|balance\s*due|tendered", re.I)


def score_amount(amount: float, raw: str, offset: int, text_length: int,
                 priority: int) -> int:
    """Tier priority adjusted by how much the amount looks like a total."""
    score = priority
    if "." in raw:
        score += 2
    if 10 <= amount <= 100000:
        score += 3
    if amount % 5 == 0:
        score += 1
    # Totals sit near the bottom
    if offset > text_length * 0.7:
        score += 2
    return score


def find_amount_candidates(text: str) -> List[AmountCandidate]:
    """Every positive amount matched by every tier, scored."""
    candidates = []
    text_length = len(text)
    for tier in AMOUNT_TIERS:
        for m in tier.pattern.finditer(text):
            raw = m.group(1)
            amount = normalize_amount(raw)
            if amount is None or not amount > 0:
                continue
            score = score_amount(amount, raw, m.start(), text_length, tier.priority)
            candidates.append(AmountCandidate(amount, score, raw, m.start()))
    return candidates


def pick_best_amount(candidates: List[AmountCandidate]) -> Optional[AmountCandidate]:
    """Highest score wins; larger amount breaks ties."""
    if not candidates:
        return None
    return max(candidates, key=lambda c: (c.score, c.amount))


def detect_currency_symbol(text: str) -> str:
    if "$" in text or DOLLAR_HINT_RE.search(text):
        return "$"
    return "₹"


def format_amount(candidate: AmountCandidate, symbol: str) -> str:
    """Whole amounts printed without cents keep no decimals."""
    if candidate.amount.is_integer() and "." not in candidate.raw:
        return f"{symbol}{candidate.amount:.0f}"
    return f"{symbol}{candidate.amount:.2f}"


def extract_total(text: str) -> Optional[str]:
    """
    Extract the total amount from receipt text.

    Returns:
        Amount with currency symbol (e.g. "$35.46", "₹649.00") or None
    """
    best = pick_best_amount(find_amount_candidates(text))
    if best is None:
        return None
    return format_amount(best, detect_currency_symbol(text))
