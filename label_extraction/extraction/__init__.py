"""
Extraction Module for the Label Extraction Engine.

This module turns label lines into a LabelRecord:
    - Brand, courier, order number and customer name resolvers
    - Product table parsing under several label layouts
    - Pixel-projection OCR for image-heavy labels
    - LabelExtractor, the page-level orchestrator

Author: ML Engineering Team
"""

from .label_record import LabelRecord, ProductLine
from .brand import resolve_brand
from .courier import resolve_courier
from .products import parse_products, legacy_products
from .order_number import extract_order_number
from .customer import extract_customer_name
from .advanced_ocr import ProjectionReader, ProjectionResult
from .orchestrator import LabelExtractor

__all__ = [
    'LabelRecord',
    'ProductLine',
    'resolve_brand',
    'resolve_courier',
    'parse_products',
    'legacy_products',
    'extract_order_number',
    'extract_customer_name',
    'ProjectionReader',
    'ProjectionResult',
    'LabelExtractor',
]
