"""End-to-end extraction with fake acquisition and OCR."""

from decimal import Decimal

import pytest

from conftest import FakeAcquisition, FakeOCREngine, FakeProjectionReader
from label_extraction.extraction import LabelExtractor, LabelRecord, ProductLine
from label_extraction.extraction.advanced_ocr import ProjectionResult

EKART_LABEL = [
    "SHOPPERS",
    "KART",
    "Ship To: Amar Singh",
    "House 12, Sector 5",
    "Product   Price   Qty",
    "Garden Hose Pipe 15m 499.00 2",
    "Total 998.00",
    "Tracking ID: IOIC0123456789",
    "Order ID: OD4455667788",
]

AMAZON_LABEL = [
    "Amazon Shipping",
    "AWB 3456789012",
    "Ship To: Priya Nair",
]

NO_PRODUCT_LABEL = [
    "Ship To: Priya Nair",
    "House 4 Lake Road",
]

SPRAYER = ProductLine("Garden Manual Sprayer")


def _extractor(pages, ocr_engine=None, projection_reader=None) -> LabelExtractor:
    return LabelExtractor(
        acquisition=FakeAcquisition(pages),
        ocr_engine=ocr_engine or FakeOCREngine(),
        projection_reader=projection_reader or FakeProjectionReader(),
    )


def test_full_label(projection_reader) -> None:
    extractor = _extractor({b"p1": EKART_LABEL}, projection_reader=projection_reader)
    record = extractor.extract(b"p1")

    assert record.brand_name == "SHOPPERS KART"
    assert record.courier_name == "Ekart"
    assert record.customer_name == "Amar Singh"
    assert record.order_number == "IOIC0123456789"
    assert record.products == [ProductLine("Garden Hose Pipe 15m", 2, Decimal("499.00"))]
    assert projection_reader.calls == 0


def test_unreadable_page_gives_empty_record() -> None:
    record = _extractor({}).extract(b"not a pdf")
    assert record == LabelRecord()
    assert record.is_empty


def test_garbage_text_gives_empty_record(ocr_engine, projection_reader) -> None:
    extractor = _extractor({b"p1": ["ab", "x", "~~", "ABC"]}, ocr_engine, projection_reader)
    record = extractor.extract(b"p1")

    assert record.is_empty
    assert projection_reader.calls == 1


def test_extraction_is_deterministic() -> None:
    extractor = _extractor({b"p1": EKART_LABEL})
    first = extractor.extract(b"p1")

    assert extractor.extract(b"p1") == first
    assert extractor.extract_lines(EKART_LABEL) == first
    assert extractor.post_processor.process(first) == first


def test_amazon_label_reads_products_by_projection_first() -> None:
    projection = FakeProjectionReader(ProjectionResult([SPRAYER], "Amazon Shipping"))
    record = _extractor({b"p1": AMAZON_LABEL}, projection_reader=projection).extract(b"p1")

    assert record.courier_name == "Amazon Shipping"
    assert record.products == [SPRAYER]
    assert record.order_number == "3456789012"
    assert record.customer_name == "Priya Nair"
    assert projection.calls == 1


def test_projection_backfills_missing_courier() -> None:
    projection = FakeProjectionReader(ProjectionResult([SPRAYER], "Amazon Shipping"))
    record = _extractor({b"p1": NO_PRODUCT_LABEL}, projection_reader=projection).extract(b"p1")

    assert record.products == [SPRAYER]
    assert record.courier_name == "Amazon Shipping"


def test_projection_garbage_is_discarded() -> None:
    projection = FakeProjectionReader(ProjectionResult([ProductLine("STVM 4411")], "Amazon Shipping"))
    record = _extractor({b"p1": NO_PRODUCT_LABEL}, projection_reader=projection).extract(b"p1")

    assert record.products == []
    assert record.courier_name == ""


def test_text_only_extraction_skips_ocr(ocr_engine, projection_reader) -> None:
    extractor = _extractor({}, ocr_engine, projection_reader)
    record = extractor.extract_lines(NO_PRODUCT_LABEL)

    assert record.customer_name == "Priya Nair"
    assert ocr_engine.calls == 0
    assert projection_reader.calls == 0


def test_logo_ocr_fills_brand_and_courier() -> None:
    engine = FakeOCREngine()
    extractor = _extractor({b"p1": NO_PRODUCT_LABEL}, ocr_engine=engine)
    engine.texts = {
        extractor.brand_logo_region: "DAZZLE HOME",
        extractor.courier_logo_region: "~ >>XPRESS ~",
    }

    record = extractor.extract(b"p1")

    assert record.brand_name == "DAZZLE HOME"
    assert record.courier_name == "Xpressbees"


def test_logo_ocr_failure_is_not_fatal() -> None:
    record = _extractor({b"p1": NO_PRODUCT_LABEL}, ocr_engine=FakeOCREngine(fail=True)).extract(b"p1")

    assert record.brand_name == ""
    assert record.courier_name == ""
    assert record.customer_name == "Priya Nair"


def test_batch_preserves_input_order() -> None:
    pages = {
        str(n).encode(): ["Ekart Logistics", f"Tracking ID: IOIC00000000{n}"]
        for n in range(1, 6)
    }
    extractor = _extractor(pages)

    records = extractor.extract_batch([b"3", b"1", b"bad", b"5"], max_workers=3)

    assert [r.order_number for r in records] == ["IOIC000000003", "IOIC000000001", "", "IOIC000000005"]
    assert records[2].is_empty
    assert extractor.extract_batch([]) == []


def test_batch_rejects_mismatched_labels() -> None:
    with pytest.raises(ValueError):
        _extractor({}).extract_batch([b"1", b"2"], labels=["only one"])
