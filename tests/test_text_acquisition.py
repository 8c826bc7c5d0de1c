"""Digital text layer first, full-page OCR for image-only pages."""

import pytest

from label_extraction.input_handler.pdf_processor import PDFProcessor
from label_extraction.input_handler.text_acquisition import (
    DigitalTextSource,
    OcrTextSource,
    TextAcquisition,
)
from label_extraction.ocr_engine import OCRResult, OCRWord, Region, reconstruct_lines
from label_extraction.utils.exceptions import CorruptedFileError, OCRProcessingError

LABEL_LINES = [
    "SHOPPERS KART",
    "Ship To: Amar Singh",
    "Tracking ID: IOIC0123456789",
]


class StaticSource:
    def __init__(self, lines):
        self.lines = lines
        self.calls = 0

    def extract_lines(self, page_bytes):
        self.calls += 1
        return list(self.lines)


class StaticTextProcessor:
    min_text_length = 50

    def __init__(self, text):
        self.text = text

    def extract_text(self, page_bytes):
        return self.text


class WordEngine:
    def __init__(self, words=None, fail=False):
        self.words = words or []
        self.fail = fail

    def recognize_region(self, page_bytes, region, height=None):
        if self.fail:
            raise OCRProcessingError("full_page", "tesseract missing")
        return OCRResult(words=self.words, lines=reconstruct_lines(self.words))


def test_digital_text_layer_is_used_when_long_enough() -> None:
    ocr = StaticSource(["never used"])
    acquisition = TextAcquisition(StaticSource(LABEL_LINES), ocr, min_text_length=50)

    assert acquisition.acquire(b"%PDF") == LABEL_LINES
    assert ocr.calls == 0


def test_image_only_page_falls_back_to_ocr() -> None:
    acquisition = TextAcquisition(StaticSource(["p1"]), StaticSource(LABEL_LINES), min_text_length=50)
    assert acquisition.acquire(b"%PDF") == LABEL_LINES


def test_ocr_without_more_text_keeps_digital_lines() -> None:
    acquisition = TextAcquisition(StaticSource(["p1"]), StaticSource([]), min_text_length=50)
    assert acquisition.acquire(b"%PDF") == ["p1"]


def test_threshold_defaults_to_pdf_setting() -> None:
    digital = DigitalTextSource(StaticTextProcessor(""))
    assert TextAcquisition(digital).min_text_length == 50


def test_digital_source_splits_lines() -> None:
    source = DigitalTextSource(StaticTextProcessor("  SHOPPERS \n\n KART "))
    assert source.extract_lines(b"%PDF") == ["SHOPPERS", "KART"]


def test_ocr_source_rebuilds_lines_from_words() -> None:
    words = [OCRWord("DELHIVERY", (300, 10, 420, 30)), OCRWord("ZEN", (0, 12, 40, 30))]
    source = OcrTextSource(WordEngine(words), Region.full_page())
    assert source.extract_lines(b"%PDF") == ["ZEN DELHIVERY"]


def test_ocr_failures_give_no_lines() -> None:
    source = OcrTextSource(WordEngine(fail=True), Region.full_page())
    assert source.extract_lines(b"%PDF") == []


def test_unreadable_pdf_raises_corrupted_file_error() -> None:
    with pytest.raises(CorruptedFileError):
        PDFProcessor().extract_text(b"definitely not a pdf")
