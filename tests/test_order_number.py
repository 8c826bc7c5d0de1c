"""Order/tracking key priority."""

from label_extraction.extraction.chain import first_match
from label_extraction.extraction.order_number import extract_order_number


def test_ekart_tracking_beats_order_id() -> None:
    lines = ["Order ID: OD123456789012", "Tracking: IOIC0123456789"]
    assert extract_order_number(lines) == "IOIC0123456789"


def test_amazon_awb() -> None:
    lines = ["Amazon Shipping", "AWB 3456789012"]
    assert extract_order_number(lines, "Amazon Shipping") == "3456789012"


def test_delhivery_labelled_awb() -> None:
    assert extract_order_number(["AWB: 281234567890"], "Delhivery") == "281234567890"


def test_barcode_number_skips_phone_numbers() -> None:
    lines = ["Phone 919876543210", "5123456789012"]
    assert extract_order_number(lines) == "5123456789012"


def test_labelled_order_number() -> None:
    assert extract_order_number(["Order Number: 4071234"]) == "4071234"


def test_form_keyword_is_not_an_order_number() -> None:
    assert extract_order_number(["Order No: INVOICE"]) == ""


def test_ref_invoice_number() -> None:
    assert extract_order_number(["Ref./Invoice #: RI-2231"]) == "RI-2231"


def test_nothing_found() -> None:
    assert extract_order_number([]) == ""


def test_first_match_stops_at_first_hit() -> None:
    seen = []

    def miss(lines):
        seen.append("miss")
        return None

    def hit(lines):
        seen.append("hit")
        return "value"

    def never(lines):
        seen.append("never")
        return "other"

    assert first_match((miss, hit, never), ["line"]) == "value"
    assert seen == ["miss", "hit"]
