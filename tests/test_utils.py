import datetime as dt

from receipt_text_pipeline.core.utils import (expand_two_digit_year, format_dmy,
                                              normalize_amount, normalize_lines, title_case)


def test_normalize_lines_trims_and_drops_blank_lines():
    assert normalize_lines("  Corner Store \n\n   \n Total 5.00\n") == ["Corner Store", "Total 5.00"]


def test_normalize_lines_empty_input():
    assert normalize_lines("") == []
    assert normalize_lines(None) == []


def test_title_case_keeps_apostrophe_suffix_lower():
    assert title_case("McDONALD'S india") == "Mcdonald's India"
    assert title_case("bistro box") == "Bistro Box"


def test_normalize_amount_strips_grouping():
    assert normalize_amount("1,234.50") == 1234.5
    assert normalize_amount("1 234") == 1234.0


def test_normalize_amount_rejects_garbage():
    assert normalize_amount("") is None
    assert normalize_amount("12.3.4") is None


def test_expand_two_digit_year_uses_current_century():
    assert expand_two_digit_year("24", dt.date(2026, 10, 17)) == "2024"
    assert expand_two_digit_year("05", dt.date(2101, 1, 1)) == "2105"


def test_format_dmy():
    assert format_dmy(dt.date(2025, 8, 7)) == "07/08/2025"
