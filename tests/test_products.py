"""Product table layouts, name cleaning and the single-product fallback."""

import re
from decimal import Decimal

import pytest

from label_extraction.extraction.label_record import ProductLine
from label_extraction.extraction.products import (
    clean_product_name,
    find_product_header,
    is_garbage_name,
    legacy_products,
    parse_products,
    products_from_item_description,
    strip_leading_sku,
)

TAX_CODE = re.compile(r'GST|HSN', re.IGNORECASE)


def test_generic_table_strips_sku_tax_codes() -> None:
    lines = ["Product Name SKU Qty Price", "Widget ABC-GST-18-HSN1234 2 199.00"]
    assert parse_products(lines) == [ProductLine("Widget", 2, Decimal("199.00"))]


def test_generic_table_joins_wrapped_names() -> None:
    lines = [
        "Product Name SKU Qty Price",
        "Stainless Steel",
        "Water Bottle 1 349.00",
        "Total 349.00",
    ]
    assert parse_products(lines) == [
        ProductLine("Stainless Steel Water Bottle", 1, Decimal("349.00")),
    ]


def test_item_description_block() -> None:
    lines = ["Item description", "1 Garden Manual Sprayer QTY-1", "STVM123"]
    assert parse_products(lines) == [ProductLine("Garden Manual Sprayer", 1, Decimal("0"))]


def test_item_description_accepts_misread_qty() -> None:
    lines = [
        "# | Item description",
        "1 Garden Manual Sprayer QTY-1",
        "2 Steel Bottle OTY 2",
        "STVM123",
    ]
    products = products_from_item_description(lines)
    assert [(p.product_name, p.quantity) for p in products] == [
        ("Garden Manual Sprayer", 1),
        ("Steel Bottle", 2),
    ]


def test_price_qty_columns_with_grouped_price() -> None:
    lines = [
        "Product   Price   Qty",
        "Wireless Bluetooth",
        "Headphones 19,999.00 1",
        "Total 19,999.00",
    ]
    assert parse_products(lines) == [
        ProductLine("Wireless Bluetooth Headphones", 1, Decimal("19999.00")),
    ]


def test_no_table_gives_no_products() -> None:
    assert parse_products(["Ship To: Priya Nair", "Sector 5"]) == []


@pytest.mark.parametrize(
    "lines",
    [
        ["Product Name SKU Qty Price", "Widget ABC-GST-18-HSN1234 2 199.00"],
        ["Item description", "1 Trimmer TRM-GST-18 QTY-1"],
        ["Product Name SKU Qty Price", "Soap Dish HSN3924 3 120.00"],
    ],
)
def test_product_names_never_carry_tax_codes(lines) -> None:
    products = parse_products(lines) or legacy_products(lines)
    assert products
    assert not any(TAX_CODE.search(p.product_name) for p in products)


def test_clean_product_name() -> None:
    assert clean_product_name("Garden Sprayer GS-GST-18-HSN8424") == "Garden Sprayer"
    assert clean_product_name("Trimmer HSN8510 black") == "Trimmer"
    assert clean_product_name("USB  CABLE CABLE") == "USB CABLE"
    assert clean_product_name("ab") is None
    assert clean_product_name(None) is None


def test_strip_leading_sku_keeps_readable_text() -> None:
    assert strip_leading_sku(["HAIR", "CUTT...", "Trimmer"]) == ["Trimmer"]
    assert strip_leading_sku(["USB", "CABLE"]) == ["USB", "CABLE"]


def test_product_header_split_over_two_lines() -> None:
    assert find_product_header(["Ship To", "Product", "Name", "Mug 1 99"]) == 2


def test_legacy_fallback_skips_footer_codes() -> None:
    lines = ["Product Name", "STVM", "Bamboo Toothbrush Set"]
    assert parse_products(lines) == []
    assert legacy_products(lines) == [ProductLine("Bamboo Toothbrush Set")]


def test_garbage_names() -> None:
    assert is_garbage_name("pE—T")
    assert is_garbage_name("abc")
    assert is_garbage_name("12345")
    assert not is_garbage_name("Soap Dish")


def test_generic_table_reads_grouped_price() -> None:
    lines = ["Product Name SKU Qty Price", "Smart Watch 1 1,299.00", "Total 1,299.00"]
    assert parse_products(lines) == [ProductLine("Smart Watch", 1, Decimal("1299.00"))]


def test_qty_before_price_header_uses_generic_table() -> None:
    lines = ["Product Name Qty Price", "Ceramic Mug 1 599", "Total 599"]
    assert parse_products(lines) == [ProductLine("Ceramic Mug", 1, Decimal("599.00"))]


def test_discount_row_closes_pending_name_and_total_ends_table() -> None:
    lines = [
        "Product Name SKU Qty Price",
        "Bamboo Serving Tray",
        "Discount -50.00",
        "Steel Bottle 2 350.00",
        "Total 650.00",
        "Return Policy 1 10.00",
    ]
    assert parse_products(lines) == [
        ProductLine("Bamboo Serving Tray", 1, Decimal("0")),
        ProductLine("Steel Bottle", 2, Decimal("350.00")),
    ]


def test_item_description_row_without_qty_is_quantity_one() -> None:
    lines = [
        "# | Item description",
        "1 Garden Manual Sprayer",
        "2 Steel Bottle QTY-2",
        "3",
        "STVM123 Garden Kit",
    ]
    assert products_from_item_description(lines) == [
        ProductLine("Garden Manual Sprayer", 1, Decimal("0")),
        ProductLine("Steel Bottle", 2, Decimal("0")),
    ]
