"""
PDF Processor Module.

This module handles single-page label PDFs:
    - Digital text-layer extraction (pdfplumber)
    - Image-only page detection
    - Page rendering for OCR (PyMuPDF, pdf2image as fallback)

Every method takes the raw bytes of one page; the engine never touches
the filesystem.

Author: ML Engineering Team
"""

import io
from typing import Optional

import fitz  # PyMuPDF
import pdf2image
import pdfplumber
from PIL import Image

from config import get_config
from label_extraction.utils.logger import get_logger
from label_extraction.utils.exceptions import CorruptedFileError

# Initialize module logger
logger = get_logger(__name__)


class PDFProcessor:
    """
    Processor for single-page label PDFs.

    Attributes:
        min_text_length: Digital text shorter than this marks an image-only page
        render_height: Default pixel height used when rendering for OCR

    Example:
        >>> processor = PDFProcessor()
        >>> text = processor.extract_text(page_bytes)
        >>> image = processor.render_page(page_bytes)
    """

    def __init__(self) -> None:
        """Initialize the PDF processor with configuration."""
        self.min_text_length = get_config("input.pdf.min_text_length", 50)
        self.render_height = get_config("input.pdf.render_height", 2000)

        logger.debug(
            f"PDFProcessor initialized (min_text_length={self.min_text_length}, "
            f"render_height={self.render_height})"
        )

    def extract_text(self, page_bytes: bytes) -> str:
        """
        Extract the embedded text layer of the first page.

        Args:
            page_bytes: Raw bytes of a one-page PDF.

        Returns:
            Text with line breaks preserved; empty string when the page
            has no text layer.

        Raises:
            CorruptedFileError: If the bytes cannot be opened as a PDF.
        """
        try:
            with pdfplumber.open(io.BytesIO(page_bytes)) as pdf:
                if not pdf.pages:
                    return ""
                text = pdf.pages[0].extract_text() or ""
        except Exception as e:
            logger.error(f"Could not read PDF text layer: {e}")
            raise CorruptedFileError("page", str(e))

        logger.debug(f"Digital text layer: {len(text)} characters")
        return text

    def render_page(self, page_bytes: bytes, height: Optional[int] = None) -> Image.Image:
        """
        Render the first page to an RGB image scaled to a pixel height.

        Args:
            page_bytes: Raw bytes of a one-page PDF.
            height: Target height in pixels (defaults to render_height).

        Returns:
            Rendered PIL Image.

        Raises:
            CorruptedFileError: If neither renderer can process the page.
        """
        height = height or self.render_height

        try:
            return self._render_with_pymupdf(page_bytes, height)
        except Exception as e:
            logger.warning(f"PyMuPDF rendering failed, trying pdf2image: {e}")

        try:
            return self._render_with_pdf2image(page_bytes, height)
        except Exception as e:
            logger.error(f"pdf2image rendering failed: {e}")
            raise CorruptedFileError("page", str(e))

    def _render_with_pymupdf(self, page_bytes: bytes, height: int) -> Image.Image:
        doc = fitz.open(stream=page_bytes, filetype="pdf")
        try:
            page = doc.load_page(0)
            zoom = height / page.rect.height
            pix = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom))
            image = Image.open(io.BytesIO(pix.tobytes("png")))
            image.load()
        finally:
            doc.close()

        if image.mode != 'RGB':
            image = image.convert('RGB')
        return image

    def _render_with_pdf2image(self, page_bytes: bytes, height: int) -> Image.Image:
        images = pdf2image.convert_from_bytes(
            page_bytes,
            first_page=1,
            last_page=1,
            size=(None, height),
            fmt='png'
        )
        if not images:
            raise ValueError("pdf2image returned no pages")

        image = images[0]
        if image.mode != 'RGB':
            image = image.convert('RGB')
        return image
