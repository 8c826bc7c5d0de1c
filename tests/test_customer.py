"""Recipient name extraction."""

from label_extraction.extraction.customer import clean_customer_name, extract_customer_name


def test_inline_ship_to_marker() -> None:
    assert extract_customer_name(["Ship To: AMAR SINGH, House 12"]) == "Amar Singh"


def test_name_on_line_after_bare_marker() -> None:
    lines = ["Delivery Address:", "rahul verma", "Flat 4, MG Road"]
    assert extract_customer_name(lines) == "Rahul Verma"


def test_phone_number_line_is_skipped() -> None:
    lines = ["Ship To:", "9876543210", "Priya Nair"]
    assert extract_customer_name(lines) == "Priya Nair"


def test_customer_name_label() -> None:
    assert extract_customer_name(["Customer Name: john doe"]) == "John Doe"


def test_form_rows_are_not_names() -> None:
    assert extract_customer_name(["To:", "PIN 110001"]) == ""


def test_clean_customer_name() -> None:
    assert clean_customer_name("Sunita Devi Near Bus Stand") == "Sunita Devi"
    assert clean_customer_name("Pin Code 560001") == ""
    assert clean_customer_name("x") == ""
    assert clean_customer_name(None) == ""


def test_invalid_inline_value_falls_through_to_next_lines() -> None:
    lines = ["Ship To: 31/01", "Rahul Verma", "Flat 4, MG Road"]
    assert extract_customer_name(lines) == "Rahul Verma"
