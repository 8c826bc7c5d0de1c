"""
Advanced Region OCR.

Recovers the product of image-heavy marketplace labels whose text layer is
missing or unreliable. The page is rendered at high resolution, the middle
band of the label (35%-55% of the height) is split into text rows by
horizontal pixel projection, and rows are recognized one by one:

    1. The first few rows are read until the "Item description" header
    2. The row right below the header is read as the product name

A hit implies the Amazon Shipping layout, so the courier is reported too.

Author: ML Engineering Team
"""

import re
from typing import List, NamedTuple, Optional

from PIL import Image

from config import get_config
from label_extraction.utils.logger import get_logger
from label_extraction.utils.exceptions import LabelExtractionError
from label_extraction.ocr_engine.engine import OCREngine
from label_extraction.ocr_engine.projection import TextBand, find_text_bands
from label_extraction.input_handler.image_processor import ImageProcessor
from .label_record import ProductLine
from .products import clean_product_name
from .tables import AMAZON_SHIPPING

# Initialize module logger
logger = get_logger(__name__)

_HEADER = re.compile(r'Item\s*description', re.IGNORECASE)
_NAME_CLEANUP = (
    (re.compile(r'QTY.*$', re.IGNORECASE), ''),
    (re.compile(r'[|\d\[\]]+$'), ''),
    (re.compile(r'^[|\d\s\[\]]+'), ''),
    (re.compile(r'[^\w\s()-]'), ''),
)


class ProjectionResult(NamedTuple):
    """Products found by the projection pass and the courier they imply."""
    products: List[ProductLine]
    courier_name: str = ""


EMPTY_RESULT = ProjectionResult(products=[])


def clean_band_text(text: str) -> str:
    """
    Clean OCR text of a product row.

    Example:
        >>> clean_band_text("[4 | Garden Manual Sprayer QTY -1")
        'Garden Manual Sprayer'
    """
    text = ' '.join(text.split())
    for pattern, replacement in _NAME_CLEANUP:
        text = pattern.sub(replacement, text).strip()
    return text


class ProjectionReader:
    """
    Pixel-projection product reader.

    Attributes:
        ocr_engine: Renderer and recognizer
        image_processor: Grayscale conversion and band cropping
        render_height: Page render height in pixels

    Example:
        >>> reader = ProjectionReader()
        >>> result = reader.read(page_bytes)
        >>> result.products, result.courier_name
    """

    def __init__(
        self,
        ocr_engine: Optional[OCREngine] = None,
        image_processor: Optional[ImageProcessor] = None
    ) -> None:
        self.ocr_engine = ocr_engine or OCREngine()
        self.image_processor = image_processor or ImageProcessor()

        self.render_height = get_config("input.pdf.projection_render_height", 6000)
        self.band_top = get_config("extraction.projection.band_top", 0.35)
        self.band_height = get_config("extraction.projection.band_height", 0.20)
        self.sample_step = get_config("extraction.projection.sample_step", 10)
        self.dark_threshold = get_config("extraction.projection.dark_threshold", 200)
        self.density_threshold = get_config("extraction.projection.density_threshold", 5)
        self.min_band_height = get_config("extraction.projection.min_band_height", 10)
        self.padding = get_config("extraction.projection.padding", 10)
        self.header_search_bands = get_config("extraction.projection.header_search_bands", 5)

    def read(self, page_bytes: bytes) -> ProjectionResult:
        """
        Run the projection pass over one page.

        Args:
            page_bytes: Raw bytes of a one-page PDF.

        Returns:
            ProjectionResult; empty when no product row was found or any
            render/OCR step failed.
        """
        try:
            name = self._read_product_name(page_bytes)
        except LabelExtractionError as e:
            logger.warning(f"Projection OCR failed: {e}")
            return EMPTY_RESULT

        if not name:
            logger.info("Projection OCR found no product row")
            return EMPTY_RESULT

        logger.info(f"Projection OCR product: {name!r}")
        return ProjectionResult(products=[ProductLine(product_name=name)], courier_name=AMAZON_SHIPPING)

    def _read_product_name(self, page_bytes: bytes) -> Optional[str]:
        image = self.ocr_engine.render(page_bytes, self.render_height)
        crop_top = int(image.height * self.band_top)
        crop_height = int(image.height * self.band_height)

        section = image.crop((0, crop_top, image.width, crop_top + crop_height))
        bands = find_text_bands(
            self.image_processor.to_grayscale_array(section),
            sample_step=self.sample_step,
            dark_threshold=self.dark_threshold,
            density_threshold=self.density_threshold,
            min_height=self.min_band_height
        )
        logger.debug(f"Projection found {len(bands)} text rows")

        header_index = None
        for i, band in enumerate(bands[:self.header_search_bands]):
            text = self._read_band(image, crop_top, band)
            logger.debug(f"Row {i}: {text!r}")
            if _HEADER.search(text):
                header_index = i
                break

        if header_index is None or header_index + 1 >= len(bands):
            return None

        name = clean_band_text(self._read_band(image, crop_top, bands[header_index + 1]))
        return clean_product_name(name)

    def _read_band(self, image: Image.Image, offset: int, band: TextBand) -> str:
        row = self.image_processor.crop_band(image, offset + band.top, band.height, self.padding)
        return self.ocr_engine.read_image_text(self.image_processor.enhance_band(row))
