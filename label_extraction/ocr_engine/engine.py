"""
Main OCR Engine Module.

This module provides the OCREngine class, the single entry point the
extraction pipeline uses for any OCR: full-page fallback text, logo
regions and individual text bands.

Usage:
    from label_extraction.ocr_engine import OCREngine, Region

    engine = OCREngine()
    result = engine.recognize_region(page_bytes, Region.full_page())
    print(result.line_texts)

Author: ML Engineering Team
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from PIL import Image

from config import get_config
from label_extraction.utils.logger import get_logger
from label_extraction.input_handler.pdf_processor import PDFProcessor
from .ocr_result import OCRResult
from .tesseract_backend import TesseractBackend

# Initialize module logger
logger = get_logger(__name__)


@dataclass(frozen=True)
class Region:
    """
    Rectangular page region expressed as fractions of the page size.

    Attributes:
        left: Left edge (0.0 - 1.0)
        top: Top edge (0.0 - 1.0)
        width: Region width (0.0 - 1.0)
        height: Region height (0.0 - 1.0)
    """
    left: float = 0.0
    top: float = 0.0
    width: float = 1.0
    height: float = 1.0

    @classmethod
    def full_page(cls) -> 'Region':
        return cls()

    @classmethod
    def from_config(cls, name: str) -> 'Region':
        """Load a named region from ocr.regions.<name>, full page if missing."""
        values: Dict[str, float] = get_config(f"ocr.regions.{name}", {}) or {}
        return cls(
            left=float(values.get('left', 0.0)),
            top=float(values.get('top', 0.0)),
            width=float(values.get('width', 1.0)),
            height=float(values.get('height', 1.0)),
        )

    def box(self, image_width: int, image_height: int) -> Tuple[int, int, int, int]:
        """Pixel crop box (left, upper, right, lower) clamped to the image."""
        left = int(image_width * self.left)
        top = int(image_height * self.top)
        right = min(image_width, left + int(image_width * self.width))
        bottom = min(image_height, top + int(image_height * self.height))
        return left, top, right, bottom


class OCREngine:
    """
    OCR engine providing region-based recognition of label pages.

    The Tesseract backend is created on first use so that pages with a
    usable text layer never pay for (or depend on) a Tesseract install.

    Attributes:
        pdf_processor: Renderer used to turn page bytes into images

    Example:
        >>> engine = OCREngine()
        >>> text = engine.read_region_text(page_bytes, Region.from_config("courier_logo"))
    """

    def __init__(
        self,
        pdf_processor: Optional[PDFProcessor] = None,
        backend: Optional[TesseractBackend] = None
    ) -> None:
        self.pdf_processor = pdf_processor or PDFProcessor()
        self._backend = backend

        logger.debug("OCR Engine initialized")

    @property
    def backend(self) -> TesseractBackend:
        """
        Lazily created Tesseract backend.

        Raises:
            OCREngineNotAvailableError: If Tesseract is not installed.
        """
        if self._backend is None:
            self._backend = TesseractBackend()
        return self._backend

    def render(self, page_bytes: bytes, height: Optional[int] = None) -> Image.Image:
        """Render the page for OCR (see PDFProcessor.render_page)."""
        return self.pdf_processor.render_page(page_bytes, height)

    def recognize_region(
        self,
        page_bytes: bytes,
        region: Region,
        height: Optional[int] = None
    ) -> OCRResult:
        """
        Recognize positioned words inside a page region.

        Args:
            page_bytes: Raw bytes of a one-page PDF.
            region: Fractional region to crop before recognition.
            height: Optional render height in pixels.

        Returns:
            OCRResult with words and reconstructed lines.

        Raises:
            OCRError: If Tesseract is unavailable or recognition fails.
            CorruptedFileError: If the page cannot be rendered.
        """
        image = self.render(page_bytes, height)
        crop = image.crop(region.box(*image.size))

        logger.debug(f"Recognizing region {region} ({crop.size[0]}x{crop.size[1]} px)")
        return self.backend.extract(crop)

    def read_region_text(
        self,
        page_bytes: bytes,
        region: Region,
        height: Optional[int] = None
    ) -> str:
        """Plain text of a page region, lines top-to-bottom."""
        return self.recognize_region(page_bytes, region, height).text

    def read_image_text(self, image: Image.Image, psm: Optional[int] = None) -> str:
        """
        Recognize plain text of an already cropped image.

        Args:
            image: PIL Image, typically a single text band.
            psm: Page segmentation override; the backend defaults to its band mode.

        Returns:
            Recognized text, stripped.
        """
        return self.backend.get_raw_text(image, psm)
