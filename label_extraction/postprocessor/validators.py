"""
Data Validators Module.

This module provides validation functions for:
    - Product line items (name, quantity, price)
    - Record-level checks (which fields were resolved)

Author: ML Engineering Team
"""

import re
from decimal import Decimal
from typing import Dict, List, Tuple

from config import get_config
from label_extraction.utils.logger import get_logger
from label_extraction.extraction.label_record import LabelRecord, ProductLine

# Initialize module logger
logger = get_logger(__name__)


class ProductValidator:
    """
    Validates ProductLine invariants.

    Checks for:
        - Name length above the configured minimum
        - No SKU tax codes (GST/HSN) in the name
        - Quantity of at least 1
        - Non-negative price

    Example:
        >>> validator = ProductValidator()
        >>> validator.validate(ProductLine("Widget", 2, Decimal("199.00")))
        (True, 'Valid product')
    """

    TAX_CODE = re.compile(r'GST|HSN', re.IGNORECASE)

    def __init__(self) -> None:
        """Initialize the product validator."""
        self.min_name_length = get_config("postprocessing.product.min_name_length", 3)

    def validate(self, product: ProductLine) -> Tuple[bool, str]:
        """
        Validate one line item.

        Args:
            product: Line item to check.

        Returns:
            Tuple of (is_valid, message).
        """
        name = (product.product_name or "").strip()

        if len(name) < self.min_name_length:
            return False, f"Product name too short: {name!r}"
        if self.TAX_CODE.search(name):
            return False, f"Product name contains a tax code: {name!r}"
        if not isinstance(product.quantity, int) or product.quantity < 1:
            return False, f"Invalid quantity {product.quantity!r} for {name!r}"
        if not isinstance(product.price, Decimal) or product.price < 0:
            return False, f"Invalid price {product.price!r} for {name!r}"

        return True, "Valid product"

    def is_valid(self, product: ProductLine) -> bool:
        return self.validate(product)[0]


class RecordValidator:
    """
    Record-level checks.

    Unresolved fields are not errors (the engine is best-effort); they are
    reported as warnings so callers can route records to human review.
    """

    FIELDS = ('brand_name', 'courier_name', 'order_number', 'customer_name')

    def __init__(self) -> None:
        self.product_validator = ProductValidator()

    def validate(self, record: LabelRecord) -> 'ValidationResult':
        """
        Validate a label record.

        Args:
            record: Record to check.

        Returns:
            ValidationResult with per-item errors and missing-field warnings.
        """
        result = ValidationResult()

        for field in self.FIELDS:
            if not getattr(record, field):
                result.add_warning(f"Missing field: {field}")

        if not record.products:
            result.add_warning("Missing field: products")

        for index, product in enumerate(record.products):
            is_valid, message = self.product_validator.validate(product)
            result.add_field_result(f"products[{index}]", is_valid, message)

        if record.is_empty:
            result.add_warning("Nothing extracted, record needs review")

        return result


class ValidationResult:
    """
    Contains the result of validation checks.

    Attributes:
        is_valid: Overall validation result
        errors: List of error messages
        warnings: List of warning messages
        field_results: Per-field validation results
    """

    def __init__(self):
        self.is_valid = True
        self.errors: List[str] = []
        self.warnings: List[str] = []
        self.field_results: Dict[str, Tuple[bool, str]] = {}

    def add_error(self, message: str) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def add_field_result(self, field: str, is_valid: bool, message: str) -> None:
        """Add a field-level validation result."""
        self.field_results[field] = (is_valid, message)
        if not is_valid:
            self.add_error(f"{field}: {message}")
