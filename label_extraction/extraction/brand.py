"""
Brand Resolver.

Determines the store/brand that shipped a label. Strategies, in order:

    1. "Ordered From" marker (marketplace labels)
    2. Known brand keyword anywhere in the text
    3. Business email domain
    4. Invoice number prefix
    5. Brand box in the first lines of the label
    6. Logo OCR (run by the orchestrator, see brand_from_logo_text)

Author: ML Engineering Team
"""

import re
from typing import List, Optional

from label_extraction.utils.logger import get_logger
from label_extraction.utils.helpers import join_lines, split_lines, title_case
from .chain import first_match
from .tables import (
    ADDRESS_WORDS,
    BARCODE_LINE,
    BRAND_STOPWORDS,
    BRAND_SUFFIX,
    INVOICE_PREFIX_BRANDS,
    KNOWN_BRANDS,
    KNOWN_COURIER_NAMES,
    KNOWN_LOCATIONS,
    WAREHOUSE_CODE,
    WEBMAIL_DOMAINS,
)

# Initialize module logger
logger = get_logger(__name__)

MIN_BRAND_LENGTH = 3
MAX_BRAND_PARTS = 4
POSITIONAL_SCAN_LINES = 6

_ORDERED_FROM = re.compile(r'^Ordered\s*From:?(.*)', re.IGNORECASE)

# Trailing OCR noise after the store name, e.g. "Shopperskart pi -"
_MARKER_NOISE = (
    re.compile(r'\s+(pi|aa)\s*[-~]?.*$', re.IGNORECASE),
    re.compile(r'\s+[a-zA-Z]{1,2}\s+[a-zA-Z]{1,2}\s*$'),
    re.compile(r'\s+[a-zA-Z]{1,2}\s*[-~=|]?\s*$'),
    re.compile(r'\s+[-~=|]\s*$'),
    re.compile(r'[^a-zA-Z0-9.]+$'),
)

_EMAIL_LABELLED = re.compile(r'Email:\s*[a-zA-Z0-9._%+-]+@([a-zA-Z0-9.-]+\.[a-zA-Z]{2,})', re.IGNORECASE)
_EMAIL_ANY = re.compile(r'\b[a-zA-Z0-9._%+-]+@([a-zA-Z0-9.-]+\.[a-zA-Z]{2,})\b')

_INVOICE_PREFIX = re.compile(r'Invoice\s*No[:\s]*#?([A-Z]{2,4})\d+', re.IGNORECASE)

_PIN_DATE_HEADER = re.compile(r'^\d{6}\s+\d{2}/\d{2}/\d{4}')
_SHIPPING_ADDRESS = re.compile(r'Shipping\s*Address', re.IGNORECASE)
_RECIPIENT_MARKER = re.compile(r'^(To|Ship\s*To|Shipping\s*Address)\b[\s:]*', re.IGNORECASE)
_FORM_LABEL = re.compile(r'^(To|From)\s*:|^Shipping\s*Address|^Ship\s*To', re.IGNORECASE)
_BRAND_TEXT = re.compile(r"^[A-Za-z\s&'-]+$")
_KEYWORD_ROW = re.compile(r'^(COD|PIN|SKU|QTY|DATE|ORDER)', re.IGNORECASE)
_COLUMN_GAP = re.compile(r'\s{3,}')


def clean_marker_value(candidate: str) -> str:
    """Strip trailing OCR noise from an "Ordered From" value."""
    for pattern in _MARKER_NOISE:
        candidate = pattern.sub('', candidate)
    return candidate.strip()


def is_courier_name(text: str) -> bool:
    """True when the text is (or starts with) a known courier name."""
    lowered = text.lower()
    return any(
        lowered == courier or lowered.startswith(courier + ' ')
        for courier in KNOWN_COURIER_NAMES
    )


def is_brand_part(line: str) -> bool:
    """
    Check whether a line can be part of a printed brand name.

    Locations, warehouse codes, barcodes, form keywords, couriers and
    lines made only of address words are rejected. Brand text is
    2-30 characters of letters, spaces, ampersands, quotes or hyphens.
    """
    if not line or len(line) < 2:
        return False
    if line.lower() in KNOWN_LOCATIONS:
        return False
    if WAREHOUSE_CODE.match(line) or BARCODE_LINE.match(line):
        return False
    if BRAND_STOPWORDS.match(line) or _FORM_LABEL.match(line):
        return False
    if is_courier_name(line):
        return False

    words = [word for word in line.lower().split() if len(word) > 1]
    if words and all(word in ADDRESS_WORDS for word in words):
        return False

    return len(line) <= 30 and bool(_BRAND_TEXT.match(line))


# =============================================================================
# STRATEGIES
# =============================================================================

def brand_from_marker(lines: List[str]) -> Optional[str]:
    """Value of an "Ordered From:" header, same line or the next one."""
    for i, line in enumerate(lines):
        match = _ORDERED_FROM.match(line)
        if not match:
            continue

        inline = match.group(1).strip()
        if len(inline) > 1:
            candidate = inline
        elif i + 1 < len(lines):
            candidate = lines[i + 1]
        else:
            continue

        candidate = clean_marker_value(candidate)
        if len(candidate) >= MIN_BRAND_LENGTH:
            return candidate
    return None


def brand_from_keywords(lines: List[str]) -> Optional[str]:
    """Canonical brand of the first known keyword found, by table priority."""
    text = join_lines(lines).lower()
    for brand in KNOWN_BRANDS:
        for keyword in brand.keywords:
            if keyword in text:
                logger.debug(f"Known brand keyword {keyword!r} -> {brand.name}")
                return brand.name
    return None


def brand_from_email(lines: List[str]) -> Optional[str]:
    """First label of a business email domain, title-cased."""
    text = join_lines(lines)
    match = _EMAIL_LABELLED.search(text) or _EMAIL_ANY.search(text)
    if not match:
        return None

    domain = match.group(1)
    if WEBMAIL_DOMAINS.search(domain):
        return None

    store = domain.split('.')[0]
    return title_case(store) if len(store) >= MIN_BRAND_LENGTH else None


def brand_from_invoice_prefix(lines: List[str]) -> Optional[str]:
    """Brand implied by the letter prefix of "Invoice No: #SK671079"."""
    match = _INVOICE_PREFIX.search(join_lines(lines))
    if not match:
        return None
    return INVOICE_PREFIX_BRANDS.get(match.group(1).upper())


def brand_from_position(lines: List[str]) -> Optional[str]:
    """
    Brand printed in the top-left box of the label.

    Up to four consecutive brand-like lines among the first six are
    joined ("SHOPPERS" / "KART" -> "SHOPPERS KART"). A recipient line
    following "To:" or "Ship To" is skipped. Ekart labels starting with a
    "PIN DATE" row carry the brand only as a logo and yield nothing.
    """
    if (len(lines) > 1 and _PIN_DATE_HEADER.match(lines[0])
            and any(_SHIPPING_ADDRESS.search(line) for line in lines[:3])):
        return None

    parts: List[str] = []
    skip_next = False

    for i, line in enumerate(lines[:POSITIONAL_SCAN_LINES]):
        if _RECIPIENT_MARKER.match(line):
            skip_next = True
            continue
        if skip_next:
            skip_next = False
            continue

        if len(line) < 2 or WAREHOUSE_CODE.match(line) or BARCODE_LINE.match(line):
            continue

        # "Brand      Courier" printed on one row
        if '   ' in line:
            first_column = _COLUMN_GAP.split(line)[0].strip()
            if is_brand_part(first_column):
                parts.append(first_column)
                break

        if not is_brand_part(line):
            if parts:
                break
            continue

        parts.append(line)
        if BRAND_SUFFIX.search(' '.join(parts)):
            break

        if 2 <= len(parts) < MAX_BRAND_PARTS and i + 1 < len(lines):
            next_line = lines[i + 1]
            if (BARCODE_LINE.match(next_line) or _KEYWORD_ROW.match(next_line)
                    or next_line.lower() in KNOWN_COURIER_NAMES):
                break

        if len(parts) >= MAX_BRAND_PARTS:
            break

    brand = ' '.join(parts).strip()
    if MIN_BRAND_LENGTH <= len(brand) <= 50:
        return brand
    return None


BRAND_STRATEGIES = (
    brand_from_marker,
    brand_from_keywords,
    brand_from_email,
    brand_from_invoice_prefix,
    brand_from_position,
)


def resolve_brand(lines: List[str]) -> str:
    """
    Resolve the brand from label text.

    Args:
        lines: Label lines in reading order.

    Returns:
        Brand display name, or "" when no text strategy matched.
    """
    return first_match(BRAND_STRATEGIES, lines, "brand") or ""


def brand_from_logo_text(text: str) -> str:
    """
    Pick a brand from OCR text of the logo region.

    Args:
        text: Recognized text of the top-left logo area.

    Returns:
        First line that reads as brand text and is not a courier, or "".
    """
    for line in split_lines(text):
        candidate = re.sub(r"[^A-Za-z0-9&' -]", '', line).strip()
        if sum(ch.isalpha() for ch in candidate) < MIN_BRAND_LENGTH:
            continue
        if is_brand_part(candidate):
            return candidate
    return ""
