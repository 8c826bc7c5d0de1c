"""
Courier Resolver.

Determines the logistics carrier printed on a label. Strategies, in order:

    1. Courier pattern table over the full text
    2. Tracking number shapes (Ekart IOIC numbers, Delhivery AWBs)
    3. Top-right box: column fragments and bare ALL-CAPS words
    4. Logo OCR (run by the orchestrator, see courier_from_logo_text)

Author: ML Engineering Team
"""

import re
from typing import List, Optional, Sequence

from label_extraction.utils.logger import get_logger
from label_extraction.utils.helpers import join_lines
from .chain import first_match
from .tables import (
    BARCODE_LINE,
    BRAND_INDICATOR,
    COURIER_LOGO_PATTERNS,
    COURIER_PATTERNS,
    COURIER_STOPWORDS,
    DELHIVERY,
    EKART,
    WAREHOUSE_CODE,
    CanonicalPattern,
)

# Initialize module logger
logger = get_logger(__name__)

POSITIONAL_SCAN_LINES = 5

EKART_TRACKING = re.compile(r'IOIC\d{9,}')
DELHIVERY_AWB = re.compile(r'\b(27|28|29)\d{12}\b')
GENERIC_AWB = re.compile(r'\b\d{14}\b')
DELHIVERY_HINT = re.compile(r'Ref\.?\s*/\s*Invoice|Order\s*Number', re.IGNORECASE)

_COLUMN_GAP = re.compile(r'\s{3,}')
_CAPS_WORD = re.compile(r'^[A-Z]{3,20}$')


def match_courier(text: str, patterns: Sequence[CanonicalPattern] = COURIER_PATTERNS) -> Optional[str]:
    """Canonical name of the first table pattern found in the text."""
    for entry in patterns:
        if entry.pattern.search(text):
            return entry.name
    return None


# =============================================================================
# STRATEGIES
# =============================================================================

def courier_from_patterns(lines: List[str]) -> Optional[str]:
    return match_courier(join_lines(lines))


def courier_from_tracking(lines: List[str]) -> Optional[str]:
    """
    Infer the courier from tracking number shapes.

    "IOIC" + digits is Ekart. A 14-digit AWB starting 27/28/29 is
    Delhivery. Any other 14-digit number is Delhivery only when the label
    also prints "Ref./Invoice" or "Order Number" (weak signal).
    """
    text = join_lines(lines)

    if EKART_TRACKING.search(text):
        return EKART
    if DELHIVERY_AWB.search(text):
        return DELHIVERY
    if GENERIC_AWB.search(text) and DELHIVERY_HINT.search(text):
        logger.debug("Courier guessed from 14-digit AWB and Delhivery form labels")
        return DELHIVERY
    return None


def courier_from_position(lines: List[str]) -> Optional[str]:
    """
    Courier printed in the top-right box.

    Rows of the first five lines are split on wide gaps. Each fragment is
    tested against the pattern table, then, as a last resort, accepted
    as-is when it is a bare ALL-CAPS word that is not a brand or form word.
    """
    for line in lines[:POSITIONAL_SCAN_LINES]:
        if WAREHOUSE_CODE.match(line) or BARCODE_LINE.match(line):
            continue

        for part in _COLUMN_GAP.split(line):
            part = part.strip()
            if len(part) < 3:
                continue

            courier = match_courier(part)
            if courier:
                return courier

            if (_CAPS_WORD.match(part) and not BRAND_INDICATOR.search(part)
                    and part not in COURIER_STOPWORDS):
                return part
    return None


COURIER_STRATEGIES = (
    courier_from_patterns,
    courier_from_tracking,
    courier_from_position,
)


def resolve_courier(lines: List[str]) -> str:
    """
    Resolve the courier from label text.

    Args:
        lines: Label lines in reading order.

    Returns:
        Canonical courier name, a raw ALL-CAPS candidate, or "".
    """
    return first_match(COURIER_STRATEGIES, lines, "courier") or ""


def courier_from_logo_text(text: str) -> str:
    """Match OCR text of the courier logo region against the logo table."""
    return match_courier(text, COURIER_LOGO_PATTERNS) or ""
