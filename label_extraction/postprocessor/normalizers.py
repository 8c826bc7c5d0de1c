"""
Data Normalizers Module.

This module provides normalization functions for:
    - Printed prices (rupee symbols, "Rs." prefixes, grouped digits)
    - Product name text

Author: ML Engineering Team
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from config import get_config
from label_extraction.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)


class AmountNormalizer:
    """
    Normalizes printed price strings to Decimal values.

    Handles currency symbols and codes, "Rs." prefixes and both western
    (19,999.00) and Indian (1,99,999.00) digit grouping.

    Attributes:
        currencies: Recognized currency symbols and codes
        decimal_places: Quantization applied to every value

    Example:
        >>> normalizer = AmountNormalizer()
        >>> normalizer.normalize("Rs.1,999")
        "1999.00"
        >>> normalizer.to_decimal("₹ 499.5")
        Decimal('499.50')
    """

    CURRENCY_SYMBOLS = ['₹', '$', '€', '£']
    CURRENCY_CODES = ['INR', 'RS', 'USD']

    def __init__(self) -> None:
        """Initialize the amount normalizer with configuration."""
        self.currencies = get_config(
            "postprocessing.amount.currencies",
            self.CURRENCY_SYMBOLS + self.CURRENCY_CODES
        )
        self.decimal_places = get_config("postprocessing.amount.decimal_places", 2)
        self._quantum = Decimal(1).scaleb(-self.decimal_places)

    def to_decimal(self, amount_str: Optional[str]) -> Optional[Decimal]:
        """
        Parse an amount string.

        Args:
            amount_str: Raw amount text, e.g. "Rs.1,999.00".

        Returns:
            Non-negative Decimal rounded to ``decimal_places``, or None.
        """
        if not amount_str:
            return None

        cleaned = self._clean_amount_string(str(amount_str))
        if not cleaned:
            return None

        try:
            value = Decimal(cleaned)
        except InvalidOperation:
            logger.debug(f"Could not parse amount: {amount_str!r}")
            return None

        if value < 0:
            return None
        return value.quantize(self._quantum)

    def normalize(self, amount_str: Optional[str]) -> Optional[str]:
        """Normalized amount string (e.g. "1999.00") or None."""
        value = self.to_decimal(amount_str)
        return None if value is None else str(value)

    def is_valid_amount(self, amount_str: Optional[str]) -> bool:
        return self.to_decimal(amount_str) is not None

    def _clean_amount_string(self, amount_str: str) -> str:
        """
        Strip currency markers and digit grouping.

        Args:
            amount_str: Raw amount string.

        Returns:
            Plain decimal string, possibly empty.
        """
        amount_str = ''.join(amount_str.split())

        for currency in self.currencies:
            if currency.isalpha():
                amount_str = re.sub(rf'^{currency}\.?', '', amount_str, flags=re.IGNORECASE)
            else:
                amount_str = amount_str.replace(currency, '')

        amount_str = amount_str.lstrip('.')
        amount_str = re.sub(r'[^\d,.]', '', amount_str)
        amount_str = amount_str.replace(',', '')

        # "199." and similar OCR endings
        return amount_str.rstrip('.')


def clean_text(text: Optional[str]) -> str:
    """Collapse whitespace; None becomes an empty string."""
    if not text:
        return ""
    return ' '.join(str(text).split())
