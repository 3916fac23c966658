"""
Loading recognised receipt text and OCR metadata.

Recognition itself happens elsewhere; this module reads its output: plain
text files, Google Vision JSON responses and the text layer of searchable PDFs.
"""

import json
import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .models import BoundingBox, OcrResult, ParagraphInfo, WordInfo
from .utils import IMAGE_EXTS, PDF_EXTS, TEXT_EXTS, VISION_EXTS


def clean_ocr_text(raw_text: str) -> str:
    """Normalize line endings, squeeze spaces and drop blank lines."""
    text = raw_text.replace("\r\n", "\n").replace("\r", "\n")
    lines = (re.sub(r"[ \t\f\v]+", " ", ln).strip() for ln in text.split("\n"))
    return "\n".join(ln for ln in lines if ln)


def bounding_box(vertices: List[Dict]) -> BoundingBox:
    """Envelope of a Vision polygon; missing coordinates count as 0."""
    if len(vertices) < 4:
        return BoundingBox()

    xs = [v.get("x", 0) for v in vertices]
    ys = [v.get("y", 0) for v in vertices]
    return BoundingBox(
        x=min(xs),
        y=min(ys),
        width=max(xs) - min(xs),
        height=max(ys) - min(ys),
    )


def _mean(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def parse_vision_response(response: Dict) -> Optional[OcrResult]:
    """
    Parse a Google Vision DOCUMENT_TEXT_DETECTION response.

    Accepts either the batch envelope ({"responses": [...]}) or a single
    annotate response. Returns None when no text was found.

    Word confidence is the mean of its symbols, paragraph confidence the
    mean of its words, and overall confidence the mean over all words that
    carry symbols.
    """
    if "responses" in response:
        responses = response.get("responses") or [{}]
        response = responses[0]

    annotation = response.get("fullTextAnnotation")
    if not annotation:
        return None

    words = []
    paragraphs = []
    scored_words = []

    for page in annotation.get("pages", []):
        for block in page.get("blocks", []):
            for paragraph in block.get("paragraphs", []):
                para_words = []
                for word in paragraph.get("words", []):
                    symbols = word.get("symbols", [])
                    text = "".join(s.get("text", "") for s in symbols)
                    confidence = _mean([s.get("confidence", 0.0) for s in symbols])
                    if symbols:
                        scored_words.append(confidence)
                    info = WordInfo(
                        text=text,
                        confidence=confidence,
                        bounding_box=bounding_box(word.get("boundingBox", {}).get("vertices", [])),
                    )
                    words.append(info)
                    para_words.append(info)

                if para_words:
                    paragraphs.append(ParagraphInfo(
                        text=" ".join(w.text for w in para_words),
                        confidence=_mean([w.confidence for w in para_words]),
                        bounding_box=bounding_box(paragraph.get("boundingBox", {}).get("vertices", [])),
                    ))

    return OcrResult(
        text=annotation.get("text", ""),
        confidence=_mean(scored_words),
        words=words,
        paragraphs=paragraphs,
    )


def pdf_to_text(pdf_path: Path) -> str:
    """Extract text from a searchable PDF using PyMuPDF."""
    import fitz  # pymupdf

    doc = fitz.open(pdf_path.as_posix())
    chunks = []
    for page in doc:
        chunks.append(page.get_text())
    doc.close()
    return "\n".join(chunks)


def load_receipt_text(path: Path) -> Tuple[str, Optional[OcrResult]]:
    """
    Read recognised text for one receipt.

    Returns:
        Tuple of (cleaned_text, ocr_result)
        - .txt: file contents, no metadata
        - .json: Google Vision response text plus word/paragraph metadata
        - .pdf: text layer of a searchable PDF, no metadata
    """
    ext = path.suffix.lower()

    if ext in TEXT_EXTS:
        return clean_ocr_text(path.read_text(encoding="utf-8")), None

    if ext in VISION_EXTS:
        with path.open("r", encoding="utf-8") as f:
            result = parse_vision_response(json.load(f))
        if result is None:
            return "", None
        return clean_ocr_text(result.text), result

    if ext in PDF_EXTS:
        return clean_ocr_text(pdf_to_text(path)), None

    if ext in IMAGE_EXTS:
        raise ValueError(f"Images need OCR before extraction: {path}")

    raise ValueError(f"Unsupported file type: {path}")
