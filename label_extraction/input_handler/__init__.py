"""
Input Handler Module for the Label Extraction Engine.

This module provides functionality for:
    - Reading the digital text layer of a label page
    - Rendering pages for OCR
    - Preparing rendered images and text bands
    - Acquiring ordered label lines (see text_acquisition)

text_acquisition depends on the OCR engine and is imported from its own
module path.

Author: ML Engineering Team
"""

from .pdf_processor import PDFProcessor
from .image_processor import ImageProcessor

__all__ = ['PDFProcessor', 'ImageProcessor']
