"""
Post-Processing Module for the Label Extraction Engine.

This module provides functionality for:
    - Price normalization to Decimal
    - Line item validation
    - Record cleaning and standardization

Author: ML Engineering Team
"""

from .processor import PostProcessor
from .validators import ProductValidator, RecordValidator, ValidationResult
from .normalizers import AmountNormalizer

__all__ = [
    'PostProcessor',
    'ProductValidator',
    'RecordValidator',
    'ValidationResult',
    'AmountNormalizer'
]
