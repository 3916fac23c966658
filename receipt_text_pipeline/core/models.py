"""
Data models for receipt text extraction.
"""

from dataclasses import dataclass, asdict, field
from typing import List, Optional


@dataclass
class ReceiptData:
    """Fields extracted from one receipt's OCR text."""
    vendor: Optional[str]
    date: Optional[str]
    total: Optional[str]
    raw_text: Optional[str]

    def to_dict(self):
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class ValidationResult:
    """Completeness verdict for a ReceiptData record."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)


@dataclass
class DateCandidate:
    text: str
    score: int


@dataclass
class AmountCandidate:
    amount: float
    score: int
    raw: str
    offset: int = 0


@dataclass
class BoundingBox:
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0


@dataclass
class WordInfo:
    text: str
    confidence: float
    bounding_box: BoundingBox


@dataclass
class ParagraphInfo:
    text: str
    confidence: float
    bounding_box: BoundingBox


@dataclass
class OcrResult:
    """Recognised text plus optional word/paragraph confidence metadata."""
    text: str
    confidence: Optional[float] = None
    words: List[WordInfo] = field(default_factory=list)
    paragraphs: List[ParagraphInfo] = field(default_factory=list)
