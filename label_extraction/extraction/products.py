"""
Product Table Parser.

Extracts line items from the product section of a label. Three table
layouts are tried in order; the first producing at least one item wins:

    1. Marketplace "Item description" block ("1 Garden Sprayer QTY-1")
    2. "Product | Price | Qty" columns (Ekart style)
    3. "Product Name ... SKU Qty Price" generic table

legacy_products is the single-product fallback used when no layout
matches. Every name goes through clean_product_name so that SKU, GST and
HSN codes never leak into an item.

Author: ML Engineering Team
"""

import re
from decimal import Decimal
from typing import List, Optional

from label_extraction.utils.logger import get_logger
from label_extraction.utils.helpers import join_lines
from label_extraction.postprocessor.normalizers import AmountNormalizer
from .chain import first_match
from .label_record import ProductLine
from .tables import LEGACY_GARBAGE, MARKETPLACE_FOOTER, PE_GARBAGE

# Initialize module logger
logger = get_logger(__name__)

_amounts = AmountNormalizer()

ZERO = Decimal("0")

# =============================================================================
# NAME CLEANING
# =============================================================================

_GST_SUFFIX = re.compile(r'\s+[A-Z]+-GST.*$', re.IGNORECASE)
_HSN_SUFFIX = re.compile(r'\s+[A-Z0-9-]*HSN.*$', re.IGNORECASE)
_TAX_CODE = re.compile(r'GST|HSN', re.IGNORECASE)
_SKU_CODE = re.compile(r'^[A-Z]+-\d+-')
_SKU_TOKEN = re.compile(r'^[A-Z0-9.-]+$')
_CAPS_TOKEN = re.compile(r'^[A-Z]+$')
_READABLE = re.compile(r'[A-Za-z]{2,}')
_TITLE_WORD = re.compile(r'[A-Z][a-z]')


def _dedupe_caps(words: List[str]) -> List[str]:
    """Drop ALL-CAPS words that repeat the previous word (SKU echoes)."""
    result: List[str] = []
    for word in words:
        if result and _CAPS_TOKEN.match(word) and word.lower() == result[-1].lower():
            continue
        result.append(word)
    return result


def clean_product_name(name: Optional[str]) -> Optional[str]:
    """
    Final clean-up applied to every emitted product name.

    Removes trailing "<CODE>-GST-..-HSN.." suffixes, cuts at any remaining
    GST/HSN token and collapses repeated ALL-CAPS words.

    Returns:
        Cleaned name, or None when 2 characters or fewer remain.
    """
    if not name:
        return None

    name = _GST_SUFFIX.sub('', ' '.join(name.split()))
    name = _HSN_SUFFIX.sub('', name)

    words: List[str] = []
    for word in name.split():
        if _TAX_CODE.search(word):
            break
        words.append(word)

    name = ' '.join(_dedupe_caps(words)).strip()
    return name if len(name) > 2 else None


def strip_leading_sku(words: List[str]) -> List[str]:
    """
    Remove leading SKU-like tokens ("HAIR CUTT... Trimmer" -> "Trimmer").

    A token is SKU-like when it ends with "..." or is an upper-case
    alphanumeric code longer than 2 characters. Tokens are only removed
    while readable text remains after them.
    """
    words = list(words)
    while len(words) > 1:
        first = words[0]
        sku_like = first.endswith('...') or (_SKU_TOKEN.match(first) and len(first) > 2)
        if not sku_like:
            break

        rest = ' '.join(words[1:])
        if not _READABLE.search(rest):
            break
        if _TITLE_WORD.search(rest) or len(words) > 2:
            words.pop(0)
            continue
        break
    return words


def filter_out_sku(text: str) -> str:
    """
    Keep only the product-name words of a table cell.

    Leading SKU tokens are stripped, words stop at the first GST/HSN or
    "CODE-18-" style token, and an ALL-CAPS echo of the previous word
    ends the name.
    """
    kept: List[str] = []
    for word in strip_leading_sku(text.split()):
        if _TAX_CODE.search(word) or _SKU_CODE.match(word):
            break
        if kept and _CAPS_TOKEN.match(word) and word.lower() == kept[-1].lower():
            break
        kept.append(word)
    return ' '.join(kept).strip()


def _item(name: Optional[str], quantity: int = 1, price: Decimal = ZERO) -> Optional[ProductLine]:
    name = clean_product_name(name)
    if not name:
        return None
    return ProductLine(product_name=name, quantity=max(quantity, 1), price=price)


# =============================================================================
# LAYOUT 1: "Item description" BLOCK
# =============================================================================

_ITEM_HEADER = re.compile(r'item\s*description', re.IGNORECASE)
_QTY_ROW = re.compile(r'^(.+?)\s*\b(?:QTY|OTY|QTV)\s*[-–—:]?\s*(\d+)', re.IGNORECASE)
_ROW_INDEX = re.compile(r'^[|#\s]*(?:\d+[\s|.\-–]+)?[|#\s]*')
_SEPARATOR = re.compile(r'^[_\-=—]{3,}$')
_ROW_NUMBER = re.compile(r'^[\d|Il]+$')
_BLOCK_END = re.compile(r'^(Total|Subtotal|Page)\b', re.IGNORECASE)
_NON_PRODUCT_ROW = re.compile(
    r'\b(awb|invoice|date|ship\w*|gst|cod|order\w*|address|from|to|pin|sector|zone)\b|^\d+$',
    re.IGNORECASE
)


def _qty_row_item(line: str) -> Optional[ProductLine]:
    match = _QTY_ROW.match(line)
    if not match:
        return None

    name = _ROW_INDEX.sub('', match.group(1)).strip()
    if len(name) <= 3 or MARKETPLACE_FOOTER.search(name):
        return None
    return _item(name, int(match.group(2)))


def _is_marketplace_label(text: str) -> bool:
    upper = text.upper()
    return 'AMAZON SHIPPING' in upper or ('ITEM DESCRIPTION' in upper and 'ORDERED FROM' in upper)


def _bare_row_item(line: str) -> Optional[ProductLine]:
    """Row whose QTY suffix was lost to OCR, read as quantity 1."""
    name = _ROW_INDEX.sub('', line).strip()
    if len(name) <= 3 or '__' in name or _ITEM_HEADER.match(name):
        return None
    if _ROW_NUMBER.match(name) or PE_GARBAGE.search(name) or _NON_PRODUCT_ROW.search(name):
        return None
    return _item(name)


def _item_block(lines: List[str], header_index: int) -> List[ProductLine]:
    products: List[ProductLine] = []

    for line in lines[header_index + 1:]:
        if _SEPARATOR.match(line):
            if products:
                break
            continue
        if _BLOCK_END.match(line):
            break

        item = _qty_row_item(line)
        if item:
            products.append(item)

        # Footer text may be merged onto the last item row
        if MARKETPLACE_FOOTER.search(line):
            break

        if not _QTY_ROW.match(line):
            item = _bare_row_item(line)
            if item:
                products.append(item)

    return products


def products_from_item_description(lines: List[str]) -> Optional[List[ProductLine]]:
    """
    Marketplace "# | Item description" table.

    Rows look like "1 Garden Manual Sprayer QTY-1" (OCR may read QTY as
    OTY or QTV). Rows after the header whose QTY was lost are read as
    quantity 1. Prices are not printed, so every item has price 0. On
    marketplace labels without a readable header, any QTY row outside
    address and form lines is accepted.
    """
    header_index = next((i for i, line in enumerate(lines) if _ITEM_HEADER.search(line)), None)

    products: List[ProductLine] = []
    if header_index is not None:
        products = _item_block(lines, header_index)

    if not products and _is_marketplace_label(join_lines(lines)):
        for line in lines:
            if _NON_PRODUCT_ROW.search(line) or MARKETPLACE_FOOTER.search(line):
                continue
            if not 6 <= len(line) <= 100:
                continue
            item = _qty_row_item(line)
            if item:
                products.append(item)

    return products or None


# =============================================================================
# LAYOUT 2: "Product | Price | Qty" COLUMNS
# =============================================================================

_PRODUCT = re.compile(r'Product', re.IGNORECASE)
_PRICE = re.compile(r'Price', re.IGNORECASE)
_QTY = re.compile(r'Qty', re.IGNORECASE)
_SKU = re.compile(r'SKU', re.IGNORECASE)
_PRICE_QTY_TAIL = re.compile(r'(?<![\d.,])((?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d{1,2})?)\s+(\d+)$')
_COLUMNS_END = re.compile(r'Total|Subtotal|^EKART|^Instructions', re.IGNORECASE)
_NUMERIC_LINE = re.compile(r'^\d+$')


def _is_price_qty_header(line: str) -> bool:
    price = _PRICE.search(line)
    qty = _QTY.search(line)
    if not (_PRODUCT.search(line) and price and qty) or _SKU.search(line):
        return False
    return price.start() < qty.start()


def products_from_price_qty_table(lines: List[str]) -> Optional[List[ProductLine]]:
    """
    "Product | Price | Qty" table with names wrapped over several lines.

    Name lines accumulate until a line ends with "<price> <qty>"
    (e.g. "19,999.00 1"), which closes the current item. Headers with a
    SKU column or with Qty before Price belong to the generic table.
    """
    for i, line in enumerate(lines):
        if not _is_price_qty_header(line):
            continue

        products: List[ProductLine] = []
        name_parts: List[str] = []

        for row in lines[i + 1:]:
            if _COLUMNS_END.search(row):
                break
            if len(row) < 2 or _NUMERIC_LINE.match(row):
                continue

            match = _PRICE_QTY_TAIL.search(row)
            if not match:
                name_parts.append(row)
                continue

            name_part = row[:match.start()].strip()
            if name_part:
                name_parts.append(name_part)

            if name_parts:
                item = _item(
                    ' '.join(name_parts),
                    int(match.group(2)),
                    _amounts.to_decimal(match.group(1)) or ZERO
                )
                if item:
                    products.append(item)
                name_parts = []

        if products:
            return products
    return None


# =============================================================================
# LAYOUT 3: GENERIC "Product Name SKU Qty Price" TABLE
# =============================================================================

_NAME_HEADER = re.compile(r'Product\s*Name|Item\s*Name', re.IGNORECASE)
_COLUMN_HEADER = re.compile(r'SKU|Qty|Price|Amount', re.IGNORECASE)
_BARE_NAME_HEADER = re.compile(r'^(Product|Item)\s*Name$', re.IGNORECASE)
_PRODUCT_WORD = re.compile(r'^Product$', re.IGNORECASE)
_NAME_WORD = re.compile(r'^Name$', re.IGNORECASE)
_TOTALS = re.compile(r'^(Total|Subtotal|Grand\s*Total|Discount)', re.IGNORECASE)
_TOTAL = re.compile(r'Total', re.IGNORECASE)
_SKU_LINE = (
    re.compile(r'^[A-Z\s]+-GST-\d+-HSN\d+$'),
    re.compile(r'^[A-Z]+\s+[A-Z]+-GST-'),
)
_QTY_PRICE_TAIL = re.compile(r'\b(\d+)\s+([Rs.₹]*(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d{1,2})?)\s*$')


def find_product_header(lines: List[str]) -> Optional[int]:
    """
    Index of the generic product table header.

    Tries, in order: "Product Name" with column names on the same line,
    "Product" / "Name" split over two lines, then a bare "Product Name".
    """
    for i, line in enumerate(lines):
        if _NAME_HEADER.search(line) and _COLUMN_HEADER.search(line):
            return i

    for i in range(len(lines) - 1):
        if _PRODUCT_WORD.match(lines[i]) and _NAME_WORD.match(lines[i + 1]):
            return i + 1

    for i, line in enumerate(lines):
        if _BARE_NAME_HEADER.match(line):
            return i

    return None


def products_from_generic_table(lines: List[str]) -> Optional[List[ProductLine]]:
    """
    Generic product table where each row ends with "<qty> <price>".

    Name words may wrap across lines; they accumulate until the qty/price
    tail is found. A Discount row closes a pending name as qty 1, price 0
    and a Total row ends the table.
    """
    header_index = find_product_header(lines)
    if header_index is None:
        return None

    products: List[ProductLine] = []
    pending: List[str] = []

    for line in lines[header_index + 1:]:
        if _TOTALS.match(line):
            if pending:
                item = _item(' '.join(pending))
                if item:
                    products.append(item)
                pending = []
            if _TOTAL.search(line):
                break
            continue

        if len(line) < 2 or any(pattern.match(line) for pattern in _SKU_LINE):
            continue

        match = _QTY_PRICE_TAIL.search(line)
        if not match:
            words = filter_out_sku(line)
            if words:
                pending.append(words)
            continue

        words = filter_out_sku(line[:match.start()].strip())
        if words:
            pending.append(words)

        price = _amounts.to_decimal(match.group(2)) or ZERO
        item = _item(' '.join(pending), int(match.group(1)) or 1, price)
        if item:
            products.append(item)
        pending = []

    return products or None


PRODUCT_LAYOUTS = (
    products_from_item_description,
    products_from_price_qty_table,
    products_from_generic_table,
)


def parse_products(lines: List[str]) -> List[ProductLine]:
    """
    Extract line items from the first matching table layout.

    Args:
        lines: Label lines in reading order.

    Returns:
        Line items, or an empty list when no layout matched.
    """
    return first_match(PRODUCT_LAYOUTS, lines, "products") or []


# =============================================================================
# LEGACY SINGLE PRODUCT
# =============================================================================

_LEGACY_HEADERS = (
    lambda lines, i: bool(_NAME_HEADER.search(lines[i]) and _COLUMN_HEADER.search(lines[i])),
    lambda lines, i: bool(i > 0 and _PRODUCT_WORD.match(lines[i - 1]) and _NAME_WORD.match(lines[i])),
    lambda lines, i: bool(re.search(r'(Product|Item)\s*(Name|description)', lines[i], re.IGNORECASE)),
    lambda lines, i: bool(re.search(r'^SKU$|SKU\s+Qty', lines[i], re.IGNORECASE)),
)
_LEGACY_SKU_LINE = (
    re.compile(r'^[A-Z\s]+-[A-Z0-9-]+$'),
    re.compile(r'^[A-Z]{3,}\s*-\d+-'),
)
_LEGACY_TAIL = re.compile(r'\s+\d+\s+[Rs.₹]*\d+[\d.]*\s*$')
_NUMBER_WORD = re.compile(r'^\d+$')
_LETTER = re.compile(r'[a-zA-Z]')


def is_garbage_name(name: str) -> bool:
    """Known footer/barcode residue, too short, or no letters at all."""
    return bool(LEGACY_GARBAGE.search(name)) or len(name) < 4 or not _LETTER.search(name)


def _legacy_line_name(line: str) -> str:
    line = _LEGACY_TAIL.sub('', line).strip()

    kept: List[str] = []
    for word in strip_leading_sku(line.split()):
        if _TAX_CODE.search(word) or re.match(r'^[A-Z]+-\d+|^\d+-[A-Z]+', word):
            break
        if _NUMBER_WORD.match(word):
            continue
        if kept and _CAPS_TOKEN.match(word) and word.lower() == kept[-1].lower():
            break
        kept.append(word)
    return ' '.join(kept)


def legacy_product_name(lines: List[str]) -> Optional[str]:
    """
    First plausible product name after a product header.

    Header forms are tried in order; the first line after the header that
    yields a clean, non-garbage name is returned.
    """
    header_index = None
    for matches in _LEGACY_HEADERS:
        header_index = next((i for i in range(len(lines)) if matches(lines, i)), None)
        if header_index is not None:
            break
    if header_index is None:
        return None

    for line in lines[header_index + 1:]:
        if _TOTALS.match(line):
            break
        if PE_GARBAGE.search(line) or len(line) < 2 or _TAX_CODE.search(line):
            continue
        if any(pattern.match(line) for pattern in _LEGACY_SKU_LINE):
            continue

        name = clean_product_name(_legacy_line_name(line))
        if name and not is_garbage_name(name):
            return name

    return None


def legacy_products(lines: List[str]) -> List[ProductLine]:
    """Single-product fallback: one item, quantity 1, price 0."""
    name = legacy_product_name(lines)
    if not name:
        return []
    logger.debug(f"Legacy single-product fallback: {name!r}")
    return [ProductLine(product_name=name)]
