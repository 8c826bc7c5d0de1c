"""
Main Post-Processor Module.

This module provides the PostProcessor class that finalizes label records
before they are returned to the caller.

Operations:
    - Replace missing string fields with empty strings
    - Collapse whitespace in every text field
    - Normalize prices to Decimal and quantities to int
    - Drop line items that break ProductLine invariants
    - Log a summary

Author: ML Engineering Team
"""

from decimal import Decimal
from typing import List, Optional

from label_extraction.utils.logger import get_logger
from label_extraction.extraction.label_record import LabelRecord, ProductLine
from .normalizers import AmountNormalizer, clean_text
from .validators import ProductValidator, RecordValidator, ValidationResult

# Initialize module logger
logger = get_logger(__name__)


class PostProcessor:
    """
    Post-processor for label records.

    The input record is never modified; a cleaned copy is returned.
    Processing an already processed record returns an equal record.

    Attributes:
        amount_normalizer: AmountNormalizer instance
        product_validator: ProductValidator instance
        record_validator: RecordValidator instance

    Example:
        >>> processor = PostProcessor()
        >>> record = processor.process(raw_record)
        >>> print(record.products)
    """

    def __init__(self) -> None:
        """Initialize the post-processor with all sub-components."""
        self.amount_normalizer = AmountNormalizer()
        self.product_validator = ProductValidator()
        self.record_validator = RecordValidator()

        logger.debug("PostProcessor initialized")

    def process(self, record: LabelRecord) -> LabelRecord:
        """
        Clean and validate a label record.

        Args:
            record: Record assembled by the extraction pipeline.

        Returns:
            New LabelRecord with clean strings and only valid line items.
        """
        processed = LabelRecord(
            brand_name=clean_text(record.brand_name),
            courier_name=clean_text(record.courier_name),
            products=self._clean_products(record.products),
            order_number=clean_text(record.order_number),
            customer_name=clean_text(record.customer_name),
        )

        validation = self.record_validator.validate(processed)
        self._log_processing_summary(record, processed, validation)
        return processed

    def _clean_products(self, products: Optional[List[ProductLine]]) -> List[ProductLine]:
        cleaned: List[ProductLine] = []

        for product in products or []:
            candidate = ProductLine(
                product_name=clean_text(product.product_name),
                quantity=self._normalize_quantity(product.quantity),
                price=self._normalize_price(product.price),
            )
            is_valid, message = self.product_validator.validate(candidate)
            if is_valid:
                cleaned.append(candidate)
            else:
                logger.debug(f"Dropping line item: {message}")

        return cleaned

    def _normalize_quantity(self, quantity) -> int:
        """Quantity as int, 1 when missing or unparseable."""
        try:
            value = int(quantity)
        except (TypeError, ValueError):
            return 1
        return value if value >= 1 else 1

    def _normalize_price(self, price) -> Decimal:
        if isinstance(price, Decimal) and price >= 0:
            return price
        value = self.amount_normalizer.to_decimal(None if price is None else str(price))
        return value if value is not None else Decimal("0")

    def _log_processing_summary(
        self,
        original: LabelRecord,
        processed: LabelRecord,
        validation: ValidationResult
    ) -> None:
        """
        Log a summary of processing operations.

        Args:
            original: Record before processing.
            processed: Record after processing.
            validation: Validation results.
        """
        dropped = len(original.products or []) - len(processed.products)

        logger.debug(
            f"Post-processing complete: "
            f"{len(processed.products)} items kept, "
            f"{dropped} dropped, "
            f"{len(validation.warnings)} warnings"
        )

        for warning in validation.warnings[:5]:
            logger.debug(f"Validation warning: {warning}")
