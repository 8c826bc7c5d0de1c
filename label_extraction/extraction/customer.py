"""
Customer Name Extractor.

Finds the recipient name in the shipping block of a label:

    - Inline markers: "Ship To: John Smith", "Deliver To:", "Consignee:",
      "To: First Last"
    - Bare marker lines ("Ship To", "Delivery Address", "To:") followed
      by the name on the next line or the one after
    - "Customer Name:" / "Recipient:" / "Buyer:" as a last resort

Author: ML Engineering Team
"""

import re
from typing import List, Optional

from label_extraction.utils.helpers import title_case
from .chain import first_match
from .tables import ADDRESS_BOUNDARY, NON_NAME_KEYWORDS

LOOKAHEAD_LINES = 2
MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 60

INLINE_MARKERS = (
    re.compile(r'^(?:Ship\s*To|Deliver\s*To|Consignee)\s*:\s*(.+)', re.IGNORECASE),
    re.compile(r'^To\s*:\s*([A-Z][a-z]+(?:\s+[A-Z][a-z]+)+)', re.IGNORECASE),
)
BARE_MARKERS = (
    re.compile(
        r'^(?:Ship\s*To|Deliver\s*To|Delivery\s*Address|Shipping\s*Address|Consignee)\s*:?\s*$',
        re.IGNORECASE
    ),
    re.compile(r'^To\s*:?\s*$', re.IGNORECASE),
)
NAME_LABEL = re.compile(r'(?:Customer\s*Name|Recipient|Buyer)\s*:\s*(.+)', re.IGNORECASE)

_LEADING_NOISE = re.compile(r'^[^a-zA-Z]+')
_TRAILING_NOISE = re.compile(r'[^a-zA-Z.\s]+$')
_DIGIT_RUN = re.compile(r'\d{5,}')
_PIN_CODE = re.compile(r'pin\s*code', re.IGNORECASE)


def clean_customer_name(text: Optional[str]) -> str:
    """
    Validate and normalize a name candidate.

    Args:
        text: Raw candidate text.

    Returns:
        Title-cased name, or "" when the text is not a plausible name.

    Example:
        >>> clean_customer_name("AMAR SINGH, House 12")
        'Amar Singh'
    """
    if not text or len(text) < MIN_NAME_LENGTH:
        return ""

    name = _TRAILING_NOISE.sub('', _LEADING_NOISE.sub('', text)).strip()

    if _DIGIT_RUN.search(name) or _PIN_CODE.search(name):
        return ""
    if NON_NAME_KEYWORDS.match(name):
        return ""
    if not MIN_NAME_LENGTH <= len(name) <= MAX_NAME_LENGTH:
        return ""

    name = re.split(r'[,\n]', name)[0].strip()
    name = ADDRESS_BOUNDARY.sub('', name).strip()

    if not re.search(r'[a-zA-Z]', name):
        return ""

    name = title_case(name)
    return name if len(name) >= MIN_NAME_LENGTH else ""


def _name_after(lines: List[str], index: int) -> str:
    """First valid name among the lines following ``index``."""
    for line in lines[index + 1:index + 1 + LOOKAHEAD_LINES]:
        name = clean_customer_name(line)
        if name:
            return name
    return ""


def name_from_inline_marker(lines: List[str]) -> Optional[str]:
    """Name on the marker line; garbage inline values fall back to the next lines."""
    for i, line in enumerate(lines):
        for pattern in INLINE_MARKERS:
            match = pattern.match(line)
            if not match:
                continue
            name = clean_customer_name(match.group(1).strip()) or _name_after(lines, i)
            if name:
                return name
    return None


def name_from_bare_marker(lines: List[str]) -> Optional[str]:
    for i, line in enumerate(lines[:-1]):
        if any(pattern.match(line) for pattern in BARE_MARKERS):
            name = _name_after(lines, i)
            if name:
                return name
    return None


def name_from_name_label(lines: List[str]) -> Optional[str]:
    for line in lines:
        match = NAME_LABEL.search(line)
        if match:
            name = clean_customer_name(match.group(1).strip())
            if name:
                return name
    return None


CUSTOMER_STRATEGIES = (
    name_from_inline_marker,
    name_from_bare_marker,
    name_from_name_label,
)


def extract_customer_name(lines: List[str]) -> str:
    """Recipient name, or "" when no marker yields a valid name."""
    return first_match(CUSTOMER_STRATEGIES, lines, "customer name") or ""
