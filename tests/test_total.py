import pytest

from receipt_text_pipeline.core.models import AmountCandidate
from receipt_text_pipeline.core.parsers import (AMOUNT_TIERS, detect_currency_symbol,
                                                extract_total, find_amount_candidates,
                                                format_amount, pick_best_amount, score_amount)


def test_dollar_total():
    assert extract_total("TOTAL $35.46") == "$35.46"


def test_rupee_total():
    assert extract_total("Total: ₹235.00") == "₹235.00"


def test_total_near_end_beats_subtotal():
    text = "Corner Store\nSubtotal 20.00\nTax 1.50\nTOTAL $21.50"
    assert extract_total(text) == "$21.50"


def test_rupees_label_without_decimals():
    assert extract_total("Bill\nAmount Payable Rs 450") == "₹450"


def test_end_to_end_rupee_total(mcdonalds_text):
    assert extract_total(mcdonalds_text) == "₹649.00"


def test_no_amount():
    assert extract_total("Thank you!") is None
    assert extract_total("") is None


def test_bare_number_fallback():
    assert extract_total("Ref 42\nThanks") == "₹42"


@pytest.mark.parametrize("text,symbol", [
    ("Amount 20 AUD", "$"),
    ("Balance Due 5", "$"),
    ("Cash tendered 50", "$"),
    ("Paid $5", "$"),
    ("Total 5", "₹"),
    ("Rs. 120", "₹"),
])
def test_detect_currency_symbol(text, symbol):
    assert detect_currency_symbol(text) == symbol


def test_tie_broken_by_larger_amount():
    candidates = [
        AmountCandidate(12.0, 10, "12"),
        AmountCandidate(40.0, 10, "40"),
        AmountCandidate(99.0, 9, "99"),
    ]
    assert pick_best_amount(candidates).amount == 40.0


def test_pick_best_amount_empty():
    assert pick_best_amount([]) is None


def test_score_amount_adjustments():
    # decimal point, typical range, near the end
    assert score_amount(649.0, "649.00", 90, 100, 8) == 15
    # multiple of five only
    assert score_amount(5.0, "5", 0, 100, 1) == 2


def test_non_positive_amounts_are_dropped():
    candidates = find_amount_candidates("Total $0.00")
    assert candidates == []


def test_tiers_are_ordered_by_priority():
    priorities = [t.priority for t in AMOUNT_TIERS]
    assert priorities == sorted(priorities, reverse=True)
    assert priorities[0] == 10 and priorities[-1] == 1


@pytest.mark.parametrize("amount,raw,expected", [
    (649.0, "649.00", "₹649.00"),
    (649.0, "649", "₹649"),
    (12.5, "12.50", "₹12.50"),
    (1234.0, "1,234", "₹1234"),
])
def test_format_amount(amount, raw, expected):
    assert format_amount(AmountCandidate(amount, 0, raw), "₹") == expected


def test_extract_total_is_idempotent(mcdonalds_text):
    assert extract_total(mcdonalds_text) == extract_total(mcdonalds_text)


def test_amount_does_not_run_across_lines():
    assert extract_total("Total 649\n12 items") == "₹649"


def test_amount_with_space_grouping():
    assert extract_total("Grand Total 1 250.00") == "₹1250.00"
