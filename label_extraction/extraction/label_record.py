"""
Label Record Data Classes.

This module defines the structured output of one label extraction pass:
the LabelRecord and its ProductLine items. The record is handed to the
caller (upload/persistence layer) and is never kept by the engine.

Author: ML Engineering Team
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List


@dataclass(frozen=True)
class ProductLine:
    """
    One purchased item printed on a label.

    Attributes:
        product_name: Cleaned item name (never contains SKU/GST/HSN codes)
        quantity: Units shipped, at least 1
        price: Unit or row price as printed, 0 when the label shows none

    Example:
        >>> ProductLine("Widget", 2, Decimal("199.00"))
    """
    product_name: str
    quantity: int = 1
    price: Decimal = Decimal("0")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'product_name': self.product_name,
            'quantity': self.quantity,
            'price': float(self.price),
        }


@dataclass
class LabelRecord:
    """
    Structured data recovered from one shipping label page.

    Every string field is an empty string when unresolved, never None.
    An all-empty record means the page needs human review.

    Attributes:
        brand_name: Store/brand that shipped the parcel
        courier_name: Logistics carrier
        products: Line items in label order
        order_number: Best-effort tracking/order key for duplicate detection
        customer_name: Recipient name, title-cased

    Example:
        >>> record = LabelRecord(brand_name="SHOPPERS KART", courier_name="Ekart")
        >>> record.to_dict()["courier_name"]
        'Ekart'
    """
    brand_name: str = ""
    courier_name: str = ""
    products: List[ProductLine] = field(default_factory=list)
    order_number: str = ""
    customer_name: str = ""

    @property
    def product_name(self) -> str:
        """Name of the first line item (single-product consumers)."""
        return self.products[0].product_name if self.products else ""

    @property
    def is_empty(self) -> bool:
        """True when nothing at all was resolved."""
        return not (
            self.brand_name or self.courier_name or self.products
            or self.order_number or self.customer_name
        )

    @property
    def duplicate_key(self) -> tuple:
        """Candidate natural key used by callers for duplicate detection."""
        return (self.order_number, self.courier_name)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary format.

        Returns:
            Dictionary with prices as floats, suitable for JSON.
        """
        return {
            'brand_name': self.brand_name,
            'courier_name': self.courier_name,
            'product_name': self.product_name,
            'products': [product.to_dict() for product in self.products],
            'order_number': self.order_number,
            'customer_name': self.customer_name,
        }

    def __repr__(self) -> str:
        return (
            f"LabelRecord("
            f"brand={self.brand_name!r}, "
            f"courier={self.courier_name!r}, "
            f"products={len(self.products)}, "
            f"order={self.order_number!r})"
        )
