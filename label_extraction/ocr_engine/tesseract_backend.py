"""
Tesseract OCR Backend.

This module provides OCR functionality using Tesseract (pytesseract).
It recognizes positioned words in a page image and rebuilds lines from
their vertical positions.

Requirements:
    - Tesseract OCR installed on the system
    - pytesseract Python package

Author: ML Engineering Team
"""

import time
from typing import List, Dict, Optional

import pytesseract
from PIL import Image

from config import get_config
from label_extraction.utils.logger import get_logger
from label_extraction.utils.exceptions import OCREngineNotAvailableError, OCRProcessingError
from .ocr_result import OCRResult, OCRWord, reconstruct_lines

# Initialize module logger
logger = get_logger(__name__)


class TesseractBackend:
    """
    Tesseract OCR backend implementation.

    Attributes:
        language: Tesseract language code (e.g., "eng")
        psm: Page Segmentation Mode (1-13)
        oem: OCR Engine Mode (0-3)
        line_tolerance: Pixel tolerance used to bucket words into lines

    Example:
        >>> backend = TesseractBackend()
        >>> result = backend.extract(image)
        >>> print(result.line_texts[:3])
    """

    def __init__(self) -> None:
        """Initialize the Tesseract backend with configuration."""
        self.language = get_config("ocr.tesseract.lang", "eng")
        self.psm = get_config("ocr.tesseract.psm", 3)
        self.oem = get_config("ocr.tesseract.oem", 3)
        self.extra_config = get_config("ocr.tesseract.config", "")
        # Projection bands hold a single text row
        self.band_psm = get_config("ocr.tesseract.band_psm", 7)
        self.line_tolerance = get_config("ocr.line_tolerance", 5)

        self.version = self._check_binary()

        logger.debug(
            f"TesseractBackend initialized (lang={self.language}, "
            f"psm={self.psm}, oem={self.oem})"
        )

    def _check_binary(self) -> str:
        """
        Check that the Tesseract binary is reachable.

        Raises:
            OCREngineNotAvailableError: If Tesseract is not installed.
        """
        try:
            version = str(pytesseract.get_tesseract_version())
        except Exception as e:
            raise OCREngineNotAvailableError(
                f"Tesseract OCR (not installed or not in PATH): {e}"
            )
        logger.info(f"Tesseract version: {version}")
        return version

    def _build_config(self, psm: Optional[int] = None) -> str:
        config_parts = [
            f"--psm {psm or self.psm}",
            f"--oem {self.oem}"
        ]

        if self.extra_config:
            config_parts.append(self.extra_config)

        return ' '.join(config_parts)

    def extract(self, image: Image.Image) -> OCRResult:
        """
        Recognize positioned words in an image.

        Args:
            image: PIL Image to process.

        Returns:
            OCRResult with words and position-reconstructed lines.

        Raises:
            OCRProcessingError: If OCR processing fails.
        """
        start_time = time.time()

        try:
            if image.mode != 'RGB':
                image = image.convert('RGB')

            image_width, image_height = image.size
            config = self._build_config()

            logger.debug(f"Running Tesseract OCR (config: {config})")

            data = pytesseract.image_to_data(
                image,
                lang=self.language,
                config=config,
                output_type=pytesseract.Output.DICT
            )
        except Exception as e:
            logger.error(f"OCR processing failed: {e}")
            raise OCRProcessingError("image", str(e))

        words = self._parse_tesseract_output(data)
        lines = reconstruct_lines(words, self.line_tolerance)
        processing_time = time.time() - start_time

        result = OCRResult(
            words=words,
            lines=lines,
            raw_text='\n'.join(line.text for line in lines),
            image_width=image_width,
            image_height=image_height,
            engine="tesseract",
            processing_time=processing_time
        )

        logger.info(
            f"OCR completed: {result.word_count} words, "
            f"{result.line_count} lines, "
            f"avg confidence: {result.average_confidence:.1f}% "
            f"({processing_time:.2f}s)"
        )

        return result

    def _parse_tesseract_output(self, data: Dict[str, List]) -> List[OCRWord]:
        """
        Parse image_to_data output into OCRWord objects.

        Args:
            data: Dictionary output from image_to_data.

        Returns:
            List of OCRWord objects, empty and zero-sized boxes skipped.
        """
        words = []

        for i, text in enumerate(data['text']):
            if not text or not text.strip():
                continue

            x = data['left'][i]
            y = data['top'][i]
            w = data['width'][i]
            h = data['height'][i]

            if w <= 0 or h <= 0:
                continue

            conf = float(data['conf'][i])
            if conf < 0:
                conf = 0.0  # Tesseract returns -1 for some elements

            words.append(OCRWord(
                text=text.strip(),
                bbox=(x, y, x + w, y + h),
                confidence=conf
            ))

        return words

    def get_raw_text(self, image: Image.Image, psm: Optional[int] = None) -> str:
        """
        Recognize plain text without positions.

        Args:
            image: PIL Image to process.
            psm: Page segmentation mode, defaults to ``band_psm``.

        Returns:
            Recognized text, stripped.

        Raises:
            OCRProcessingError: If OCR processing fails.
        """
        try:
            text = pytesseract.image_to_string(
                image,
                lang=self.language,
                config=self._build_config(psm or self.band_psm)
            )
        except Exception as e:
            logger.error(f"Text extraction failed: {e}")
            raise OCRProcessingError("image", str(e))
        return text.strip()
