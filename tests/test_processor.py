import json

import pytest

from receipt_text_pipeline.core.models import ReceiptData
from receipt_text_pipeline.core.processor import (ReceiptProcessor, extract_receipt_data,
                                                  validate_receipt_data)


@pytest.mark.parametrize("text", ["", None])
def test_empty_input_gives_empty_record(text):
    data = extract_receipt_data(text)
    assert data == ReceiptData(vendor=None, date=None, total=None, raw_text=text)


def test_end_to_end(mcdonalds_text):
    data = extract_receipt_data(mcdonalds_text)
    assert data.vendor == "Mcdonald's"
    assert data.date == "07/08/2025"
    assert data.total == "₹649.00"
    assert data.raw_text == mcdonalds_text


def test_raw_text_is_trimmed():
    data = extract_receipt_data("  \nStarbucks\n  ")
    assert data.raw_text == "Starbucks"
    assert data.vendor == "Starbucks"


def test_whitespace_only_input():
    data = extract_receipt_data("   \n  ")
    assert data.raw_text == ""
    assert (data.vendor, data.date, data.total) == (None, None, None)


def test_extraction_is_idempotent(mcdonalds_text):
    assert extract_receipt_data(mcdonalds_text) == extract_receipt_data(mcdonalds_text)


def test_to_dict(mcdonalds_text):
    d = extract_receipt_data(mcdonalds_text).to_dict()
    assert set(d) == {"vendor", "date", "total", "raw_text"}


def test_validate_missing_date():
    data = ReceiptData(vendor="Starbucks", date=None, total="$9.16", raw_text="...")
    result = validate_receipt_data(data)
    assert result.is_valid is False
    assert result.errors == ["Date not found"]


def test_validate_all_missing_in_order():
    result = validate_receipt_data(extract_receipt_data(""))
    assert result.errors == ["Vendor name not found", "Date not found", "Total amount not found"]


def test_validate_complete(mcdonalds_text):
    result = validate_receipt_data(extract_receipt_data(mcdonalds_text))
    assert result.is_valid is True
    assert result.errors == []


@pytest.fixture
def receipt_dir(tmp_path, mcdonalds_text, vision_response):
    (tmp_path / "a_mcd.txt").write_text(mcdonalds_text, encoding="utf-8")
    response = vision_response(
        "STARBUCKS COFFEE\nDate: 05/06/2025\nTOTAL $9.16",
        [("STARBUCKS", 0.5), ("COFFEE", 0.6)],
    )
    (tmp_path / "b_sbux.json").write_text(json.dumps(response), encoding="utf-8")
    (tmp_path / "c_photo.jpg").write_bytes(b"\xff\xd8\xff")
    return tmp_path


def test_discover_files_skips_images(receipt_dir, capsys):
    files = ReceiptProcessor([receipt_dir]).discover_files()
    assert [f.name for f in files] == ["a_mcd.txt", "b_sbux.json"]
    assert "Skipping 1 image(s)" in capsys.readouterr().err


def test_process_all(receipt_dir):
    rows = ReceiptProcessor([receipt_dir]).process_all()
    assert [r["source_file"] for r in rows] == ["a_mcd.txt", "b_sbux.json"]

    mcd, sbux = rows
    assert (mcd["vendor"], mcd["date"], mcd["total"]) == ("Mcdonald's", "07/08/2025", "₹649.00")
    assert mcd["is_valid"] and mcd["confidence"] is None

    assert (sbux["vendor"], sbux["date"], sbux["total"]) == ("Starbucks Coffee", "05/06/2025", "$9.16")
    assert sbux["confidence"] == pytest.approx(0.55)


def test_low_confidence_warning(receipt_dir, capsys):
    ReceiptProcessor([receipt_dir / "b_sbux.json"], min_confidence=0.7).process_all()
    assert "low OCR confidence (0.55)" in capsys.readouterr().err


def test_failed_file_does_not_stop_batch(receipt_dir, capsys):
    files = [receipt_dir / "c_photo.jpg", receipt_dir / "a_mcd.txt"]
    rows = ReceiptProcessor(files).process_all()
    assert [r["source_file"] for r in rows] == ["a_mcd.txt"]
    assert "[ERROR] Failed c_photo.jpg" in capsys.readouterr().err


def test_verbose_reports_missing_fields(capsys):
    row = ReceiptProcessor([], verbose=True).process_text("Starbucks")
    assert row["errors"] == ["Date not found", "Total amount not found"]
    err = capsys.readouterr().err
    assert "[DEBUG] Vendor: 'Starbucks'" in err
    assert "[WARN] Date not found" in err
