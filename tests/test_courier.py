"""Courier resolution from label text and logo OCR."""

import pytest

from label_extraction.extraction.courier import (
    courier_from_logo_text,
    courier_from_tracking,
    resolve_courier,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("XPRESS BEES", "Xpressbees"),
        ("XYXPRESSEBEES", "Xpressbees"),
        (">>XPRESS", "Xpressbees"),
        ("DELHIV", "Delhivery"),
        ("Delhivery Surface", "Delhivery"),
        ("BLUEDART", "Blue Dart"),
        ("Amazon Shipping", "Amazon Shipping"),
        ("Amazon Transportation Services", "Amazon Shipping"),
    ],
)
def test_pattern_variants_map_to_one_canonical_name(text: str, expected: str) -> None:
    assert resolve_courier([text]) == expected


def test_ioic_tracking_number_means_ekart() -> None:
    assert resolve_courier(["Tracking ID: IOIC0123456789"]) == "Ekart"


def test_delhivery_awb_prefix() -> None:
    assert resolve_courier(["AWB 28123456789012"]) == "Delhivery"


def test_plain_fourteen_digits_need_a_delhivery_form_hint() -> None:
    assert courier_from_tracking(["12345678901234", "Ref./Invoice: INV-77"]) == "Delhivery"
    assert courier_from_tracking(["12345678901234"]) is None


def test_caps_word_in_courier_box() -> None:
    lines = ["SHOPPERS KART      SMARTSHIP", "COD"]
    assert resolve_courier(lines) == "SMARTSHIP"


def test_header_keywords_are_not_couriers() -> None:
    assert resolve_courier(["COD", "PIN 110001"]) == ""


def test_logo_text() -> None:
    assert courier_from_logo_text("~~ >>XPRESS ~~") == "Xpressbees"
    assert courier_from_logo_text("illegible") == ""
