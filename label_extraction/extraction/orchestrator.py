"""
Label Extraction Orchestrator.

This module provides the LabelExtractor class that sequences text
acquisition, every resolver, the OCR fallbacks and post-processing into
one LabelRecord per page.

Pipeline:
    1. Acquire label lines (text layer, full-page OCR for image-only pages)
    2. Brand (text strategies, then brand logo OCR)
    3. Customer name
    4. Courier (text strategies, then courier logo OCR)
    5. Products (projection OCR first for Amazon Shipping, table layouts,
       legacy single product, projection OCR with courier backfill)
    6. Order number (uses the resolved courier)
    7. Post-processing

Usage:
    from label_extraction.extraction import LabelExtractor

    extractor = LabelExtractor()
    record = extractor.extract(page_bytes)
    records = extractor.extract_batch([page_1, page_2, page_3])

Author: ML Engineering Team
"""

import time
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Sequence, Tuple

from config import get_config
from label_extraction.utils.logger import get_logger, page_context
from label_extraction.utils.helpers import split_lines, join_lines
from label_extraction.utils.exceptions import LabelExtractionError
from label_extraction.ocr_engine.engine import OCREngine, Region
from label_extraction.input_handler.text_acquisition import TextAcquisition, OcrTextSource
from label_extraction.postprocessor.processor import PostProcessor
from .advanced_ocr import ProjectionReader
from .brand import brand_from_logo_text, resolve_brand
from .courier import courier_from_logo_text, resolve_courier
from .customer import extract_customer_name
from .label_record import LabelRecord, ProductLine
from .order_number import extract_order_number
from .products import is_garbage_name, legacy_products, parse_products
from .tables import AMAZON_SHIPPING

# Initialize module logger
logger = get_logger(__name__)

# A page whose lines are all shorter than this is OCR noise
MIN_READABLE_LINE = 4


class LabelExtractor:
    """
    Shipping label extraction engine.

    Holds no per-page state: ``extract`` is safe to call from several
    threads at once, which ``extract_batch`` relies on.

    Attributes:
        acquisition: Page bytes -> label lines
        ocr_engine: Region OCR used for logo fallbacks
        projection_reader: Advanced product OCR pass
        post_processor: Final record clean-up
        max_workers: Default page concurrency for batches

    Example:
        >>> extractor = LabelExtractor()
        >>> record = extractor.extract(page_bytes)
        >>> print(record.courier_name, record.order_number)
    """

    def __init__(
        self,
        acquisition: Optional[TextAcquisition] = None,
        ocr_engine: Optional[OCREngine] = None,
        projection_reader: Optional[ProjectionReader] = None,
        post_processor: Optional[PostProcessor] = None,
        max_workers: Optional[int] = None
    ) -> None:
        self.ocr_engine = ocr_engine or OCREngine()
        self.acquisition = acquisition or TextAcquisition(ocr_source=OcrTextSource(self.ocr_engine))
        self.projection_reader = projection_reader or ProjectionReader(self.ocr_engine)
        self.post_processor = post_processor or PostProcessor()
        self.max_workers = max_workers or get_config("extraction.max_workers", 3)

        self.brand_logo_region = Region.from_config("brand_logo")
        self.courier_logo_region = Region.from_config("courier_logo")

        logger.info(f"LabelExtractor initialized (max_workers={self.max_workers})")

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def extract(self, page_bytes: bytes) -> LabelRecord:
        """
        Extract a LabelRecord from one label page.

        Args:
            page_bytes: Raw bytes of a one-page PDF.

        Returns:
            LabelRecord. Unreadable input gives an all-empty record; no
            exception crosses this method.
        """
        start_time = time.time()

        try:
            lines = self.acquisition.acquire(page_bytes)
        except LabelExtractionError as e:
            logger.error(f"Could not read label page: {e}")
            return LabelRecord()

        record = self._run_pipeline(lines, page_bytes)

        logger.info(
            f"Extracted label in {time.time() - start_time:.2f}s: "
            f"brand={record.brand_name!r}, courier={record.courier_name!r}, "
            f"products={len(record.products)}, order={record.order_number!r}"
        )
        return record

    def extract_lines(self, lines: Iterable[str]) -> LabelRecord:
        """
        Run the text-only part of the pipeline on already acquired lines.

        No OCR fallback is attempted.

        Args:
            lines: Label text lines (blank lines are dropped).

        Returns:
            LabelRecord.
        """
        return self._run_pipeline(split_lines(join_lines(lines)), page_bytes=None)

    def extract_batch(
        self,
        pages: Iterable[bytes],
        max_workers: Optional[int] = None,
        labels: Optional[Sequence[str]] = None
    ) -> List[LabelRecord]:
        """
        Extract several pages concurrently.

        Args:
            pages: One PDF byte string per label page.
            max_workers: Concurrent pages; defaults to ``self.max_workers``.
            labels: Optional page names used in log records
                    (default "page 1", "page 2", ...).

        Returns:
            One LabelRecord per page, in input order.

        Raises:
            ValueError: If labels and pages differ in length.
        """
        pages = list(pages)
        if labels is None:
            labels = [f"page {number}" for number in range(1, len(pages) + 1)]
        elif len(labels) != len(pages):
            raise ValueError(f"Got {len(labels)} labels for {len(pages)} pages")
        workers = max(1, min(max_workers or self.max_workers, len(pages) or 1))

        logger.info(f"Extracting {len(pages)} pages with {workers} workers")

        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(self._extract_labelled, pages, labels))

    def _extract_labelled(self, page_bytes: bytes, label: str) -> LabelRecord:
        with page_context(label):
            return self.extract(page_bytes)

    # =========================================================================
    # PIPELINE
    # =========================================================================

    def _run_pipeline(self, lines: List[str], page_bytes: Optional[bytes]) -> LabelRecord:
        if not any(len(line) >= MIN_READABLE_LINE for line in lines):
            logger.debug(f"No readable text in {len(lines)} lines")
            lines = []

        brand_name = resolve_brand(lines) or self._brand_from_logo(page_bytes)
        customer_name = extract_customer_name(lines)
        courier_name = resolve_courier(lines) or self._courier_from_logo(page_bytes)

        products, courier_name = self._extract_products(lines, courier_name, page_bytes)
        order_number = extract_order_number(lines, courier_name)

        record = LabelRecord(
            brand_name=brand_name,
            courier_name=courier_name,
            products=products,
            order_number=order_number,
            customer_name=customer_name,
        )
        return self.post_processor.process(record)

    def _extract_products(
        self,
        lines: List[str],
        courier_name: str,
        page_bytes: Optional[bytes]
    ) -> Tuple[List[ProductLine], str]:
        """
        Products in fallback order, plus the (possibly backfilled) courier.

        Returns:
            Tuple of (products, courier_name).
        """
        projection_tried = False

        # Amazon Shipping text layers rarely carry the item name
        if courier_name == AMAZON_SHIPPING and page_bytes is not None:
            logger.info("Amazon Shipping label, trying projection OCR first")
            projection_tried = True
            result = self.projection_reader.read(page_bytes)
            if result.products:
                return result.products, courier_name

        products = parse_products(lines) or legacy_products(lines)
        if products:
            return products, courier_name

        if page_bytes is None or projection_tried:
            return [], courier_name

        logger.info("No products in label text, trying projection OCR")
        result = self.projection_reader.read(page_bytes)
        products = [p for p in result.products if not is_garbage_name(p.product_name)]
        if products and not courier_name and result.courier_name:
            logger.info(f"Courier backfilled from projection OCR: {result.courier_name}")
            courier_name = result.courier_name
        return products, courier_name

    # =========================================================================
    # LOGO OCR
    # =========================================================================

    def _read_region(self, page_bytes: Optional[bytes], region: Region) -> str:
        """Region OCR text; OCR problems degrade to an empty string."""
        if page_bytes is None:
            return ""
        try:
            return self.ocr_engine.read_region_text(page_bytes, region)
        except LabelExtractionError as e:
            logger.warning(f"Logo OCR failed for {region}: {e}")
            return ""

    def _brand_from_logo(self, page_bytes: Optional[bytes]) -> str:
        brand = brand_from_logo_text(self._read_region(page_bytes, self.brand_logo_region))
        if brand:
            logger.info(f"Brand from logo OCR: {brand}")
        return brand

    def _courier_from_logo(self, page_bytes: Optional[bytes]) -> str:
        logger.debug("Courier not found in text, trying logo OCR")
        courier = courier_from_logo_text(self._read_region(page_bytes, self.courier_logo_region))
        if courier:
            logger.info(f"Courier from logo OCR: {courier}")
        return courier
