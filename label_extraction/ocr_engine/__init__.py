"""
OCR Engine Module for the Label Extraction Engine.

This module provides OCR functionality including:
    - Region-based recognition of rendered label pages
    - Word bounding boxes and position-based line reconstruction
    - Pixel projection to isolate single text rows

Backend:
    - Tesseract (pytesseract)

Author: ML Engineering Team
"""

from .engine import OCREngine, Region
from .tesseract_backend import TesseractBackend
from .ocr_result import OCRResult, OCRWord, OCRLine, reconstruct_lines
from .projection import TextBand, find_text_bands

__all__ = [
    'OCREngine',
    'Region',
    'TesseractBackend',
    'OCRResult',
    'OCRWord',
    'OCRLine',
    'reconstruct_lines',
    'TextBand',
    'find_text_bands',
]
