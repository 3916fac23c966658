"""Shared pytest fixtures."""

import datetime as dt

import pytest


MCDONALDS_RECEIPT = """McDonald's India
Date: 07/08/2025
Big Mac Meal - ₹350.00
Total: ₹649.00
Thank you!"""


@pytest.fixture
def mcdonalds_text():
    return MCDONALDS_RECEIPT


@pytest.fixture
def fixed_today():
    return dt.date(2026, 10, 17)


def _word(text, confidence, x=0, y=0):
    return {
        "boundingBox": {"vertices": [
            {"x": x, "y": y}, {"x": x + 10 * len(text), "y": y},
            {"x": x + 10 * len(text), "y": y + 12}, {"x": x, "y": y + 12},
        ]},
        "symbols": [{"text": ch, "confidence": confidence} for ch in text],
    }


def make_vision_response(text, word_confidences):
    """Minimal Google Vision response with one paragraph of words."""
    words = [_word(w, c, x=i * 100) for i, (w, c) in enumerate(word_confidences)]
    return {"responses": [{
        "fullTextAnnotation": {
            "text": text,
            "pages": [{"blocks": [{"paragraphs": [{
                "boundingBox": {"vertices": [
                    {"x": 0, "y": 0}, {"x": 400, "y": 0},
                    {"x": 400, "y": 12}, {"x": 0, "y": 12},
                ]},
                "words": words,
            }]}]}],
        },
    }]}


@pytest.fixture
def vision_response():
    return make_vision_response
