"""
Text Acquisition Module.

Turns the bytes of one label page into RawLabelText: an ordered list of
trimmed, non-empty lines. Two interchangeable line sources exist:

    - DigitalTextSource: the PDF's embedded text layer
    - OcrTextSource: Tesseract over a page region, lines rebuilt from
      word positions

TextAcquisition reads the digital layer first and switches to OCR when
the page is image-only.

Author: ML Engineering Team
"""

from typing import List, Optional

from label_extraction.utils.logger import get_logger
from label_extraction.utils.helpers import split_lines
from label_extraction.utils.exceptions import LabelExtractionError
from label_extraction.ocr_engine.engine import OCREngine, Region
from .pdf_processor import PDFProcessor

# Initialize module logger
logger = get_logger(__name__)


class DigitalTextSource:
    """Line source backed by the embedded PDF text layer."""

    def __init__(self, pdf_processor: Optional[PDFProcessor] = None) -> None:
        self.pdf_processor = pdf_processor or PDFProcessor()

    def extract_lines(self, page_bytes: bytes) -> List[str]:
        """
        Raises:
            CorruptedFileError: If the page is not a readable PDF.
        """
        return split_lines(self.pdf_processor.extract_text(page_bytes))


class OcrTextSource:
    """
    Line source backed by OCR of a page region.

    OCR problems (missing Tesseract, render or recognition errors) are
    logged and produce no lines.
    """

    def __init__(
        self,
        ocr_engine: Optional[OCREngine] = None,
        region: Optional[Region] = None
    ) -> None:
        self.ocr_engine = ocr_engine or OCREngine()
        self.region = region or Region.from_config("full_page")

    def extract_lines(self, page_bytes: bytes) -> List[str]:
        try:
            result = self.ocr_engine.recognize_region(page_bytes, self.region)
        except LabelExtractionError as e:
            logger.warning(f"OCR line extraction failed: {e}")
            return []
        return result.line_texts


class TextAcquisition:
    """
    Produce RawLabelText for one page.

    Attributes:
        digital_source: Primary line source
        ocr_source: Fallback line source for image-only pages
        min_text_length: Digital text shorter than this triggers OCR

    Example:
        >>> acquisition = TextAcquisition()
        >>> lines = acquisition.acquire(page_bytes)
    """

    def __init__(
        self,
        digital_source: Optional[DigitalTextSource] = None,
        ocr_source: Optional[OcrTextSource] = None,
        min_text_length: Optional[int] = None
    ) -> None:
        self.digital_source = digital_source or DigitalTextSource()
        self.ocr_source = ocr_source
        if min_text_length is None:
            min_text_length = self.digital_source.pdf_processor.min_text_length
        self.min_text_length = min_text_length

    def acquire(self, page_bytes: bytes) -> List[str]:
        """
        Read the page's lines, falling back to full-page OCR.

        Args:
            page_bytes: Raw bytes of a one-page PDF.

        Returns:
            Ordered list of trimmed non-empty lines (possibly empty).

        Raises:
            CorruptedFileError: If the bytes are not a readable PDF.
        """
        lines = self.digital_source.extract_lines(page_bytes)
        text_length = len('\n'.join(lines))

        if text_length >= self.min_text_length:
            return lines

        logger.info(
            f"Text layer has {text_length} characters (image-only page), "
            f"running full-page OCR"
        )
        if self.ocr_source is None:
            self.ocr_source = OcrTextSource()

        ocr_lines = self.ocr_source.extract_lines(page_bytes)
        ocr_length = len('\n'.join(ocr_lines))

        if ocr_length > text_length:
            logger.info(f"Full-page OCR recovered {len(ocr_lines)} lines")
            return ocr_lines

        logger.warning("Full-page OCR returned no additional text")
        return lines
