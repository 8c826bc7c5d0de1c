"""Brand resolution strategies and their precedence."""

from label_extraction.extraction.brand import (
    brand_from_logo_text,
    brand_from_position,
    clean_marker_value,
    resolve_brand,
)


def test_ordered_from_marker_beats_positional_brand() -> None:
    lines = ["DAZZLE HOME", "Ordered From:", "Shopperskart pi -"]
    assert brand_from_position(lines) == "DAZZLE HOME"
    assert resolve_brand(lines) == "Shopperskart"


def test_inline_marker_noise_is_stripped() -> None:
    assert resolve_brand(["Ordered From: Shopperskart pi -"]) == "Shopperskart"
    assert clean_marker_value("Zen Goods aa ~ 12") == "Zen Goods"


def test_known_keyword_anywhere_in_text() -> None:
    assert resolve_brand(["Return address: ZenGoods Warehouse"]) == "ZEN GOODS"


def test_business_email_domain() -> None:
    assert resolve_brand(["Email: support@dazzlehome.in"]) == "Dazzlehome"


def test_webmail_domain_is_ignored() -> None:
    assert resolve_brand(["Email: someone@gmail.com"]) == ""


def test_invoice_prefix() -> None:
    assert resolve_brand(["Invoice No: #SK671079"]) == "SHOPPERS KART"


def test_brand_box_lines_are_joined() -> None:
    assert resolve_brand(["SHOPPERS", "KART", "COD"]) == "SHOPPERS KART"


def test_recipient_after_ship_to_is_not_a_brand() -> None:
    assert resolve_brand(["Ship To", "Rahul Verma", "Sector 5"]) == ""


def test_ekart_pin_date_header_has_no_text_brand() -> None:
    lines = ["110001 12/03/2024", "Shipping Address", "DAZZLE HOME"]
    assert brand_from_position(lines) is None


def test_logo_text_skips_couriers_and_noise() -> None:
    assert brand_from_logo_text("|| \nDAZZLE HOME\n") == "DAZZLE HOME"
    assert brand_from_logo_text("DELHIVERY\nZen Store") == "Zen Store"
    assert brand_from_logo_text("") == ""
