"""
Order Identifier Extractor.

Finds a best-effort tracking/order key used by callers for duplicate
detection together with the courier name. The key is not guaranteed to
be unique. Priority:

    1. Ekart "IOIC" tracking number
    2. Courier-specific AWB (Amazon Shipping, Delhivery)
    3. Labelled AWB / Tracking ID / Waybill
    4. Standalone 12-20 digit barcode number (phone numbers excluded)
    5. Labelled Order ID / Order Number
    6. Ref/Invoice number

Author: ML Engineering Team
"""

import re
from functools import partial
from typing import List, Optional

from label_extraction.utils.helpers import join_lines
from .chain import first_match
from .tables import AMAZON_SHIPPING, DELHIVERY, MOBILE_PREFIXES, ORDER_KEYWORDS

EKART_TRACKING = re.compile(r'\b(IOIC\d{9,})\b')
AMAZON_AWB = re.compile(r'AWB\s*(\d{10,})', re.IGNORECASE)
AMAZON_TEXT = re.compile(r'Amazon\s*Shipping', re.IGNORECASE)
DELHIVERY_LABELLED_AWB = re.compile(r'(?:AWB|Tracking\s*ID)[\s:]*(\d{12,})', re.IGNORECASE)
DELHIVERY_AWB = re.compile(r'\b(2\d{11,})\b')
LABELLED_TRACKING = re.compile(r'(?:AWB|Tracking\s*ID|Waybill)[\s#:]*([A-Z0-9]{8,})', re.IGNORECASE)
BARCODE_NUMBER = re.compile(r'\b\d{12,20}\b')
LABELLED_ORDER = re.compile(
    r'Order\s*(?:ID|Number|No\.?|#)[\s:#.]*([A-Z0-9\-_]{5,})',
    re.IGNORECASE
)
REF_INVOICE = re.compile(r'Ref\.?\s*/?\s*Invoice[\s:#]*([A-Z0-9\-_]+)', re.IGNORECASE)


def order_from_ekart_tracking(lines: List[str]) -> Optional[str]:
    match = EKART_TRACKING.search(join_lines(lines))
    return match.group(1) if match else None


def order_from_courier_awb(lines: List[str], courier_name: str = "") -> Optional[str]:
    """AWB in the format of the already resolved courier."""
    text = join_lines(lines)

    if courier_name == AMAZON_SHIPPING or AMAZON_TEXT.search(text):
        match = AMAZON_AWB.search(text)
        if match:
            return match.group(1)

    if courier_name == DELHIVERY:
        match = DELHIVERY_LABELLED_AWB.search(text) or DELHIVERY_AWB.search(text)
        if match:
            return match.group(1)

    return None


def order_from_tracking_label(lines: List[str]) -> Optional[str]:
    match = LABELLED_TRACKING.search(join_lines(lines))
    return match.group(1) if match else None


def order_from_barcode_number(lines: List[str]) -> Optional[str]:
    """First long number that does not look like a phone number."""
    for code in BARCODE_NUMBER.findall(join_lines(lines)):
        if not code.startswith(MOBILE_PREFIXES):
            return code
    return None


def order_from_order_label(lines: List[str]) -> Optional[str]:
    for line in lines:
        match = LABELLED_ORDER.search(line)
        if match and match.group(1).upper() not in ORDER_KEYWORDS:
            return match.group(1)
    return None


def order_from_ref_invoice(lines: List[str]) -> Optional[str]:
    for line in lines:
        match = REF_INVOICE.search(line)
        if match:
            return match.group(1)
    return None


def extract_order_number(lines: List[str], courier_name: str = "") -> str:
    """
    Extract the order/tracking key.

    Args:
        lines: Label lines in reading order.
        courier_name: Courier resolved earlier in the pipeline.

    Returns:
        Order number, or "" when nothing matched.
    """
    strategies = (
        order_from_ekart_tracking,
        partial(order_from_courier_awb, courier_name=courier_name),
        order_from_tracking_label,
        order_from_barcode_number,
        order_from_order_label,
        order_from_ref_invoice,
    )
    return first_match(strategies, lines, "order number") or ""
