"""
Label Extraction Engine - Source Package.

This package recovers structured records (brand, courier, line items,
order number, recipient) from courier shipping labels, one PDF page per
label. Each module has a single responsibility.

Modules:
    - input_handler: Text layer reading, page rendering, text acquisition
    - ocr_engine: Region OCR, line reconstruction, pixel projection
    - extraction: Resolvers, product tables and the page orchestrator
    - postprocessor: Price normalization and record validation
    - utils: Logging, exceptions and helpers

Architecture:
    Page bytes → Text Acquisition → Resolvers → Post-Processing → LabelRecord
                        ↓                ↑
                       OCR  ─────────────┘  (logo and projection fallbacks)
"""

__version__ = "1.0.0"
__author__ = "ML Engineering Team"

# extraction must load before postprocessor (postprocessor imports its record types)
from .extraction import LabelExtractor, LabelRecord, ProductLine

__all__ = [
    'LabelExtractor',
    'LabelRecord',
    'ProductLine',
]
