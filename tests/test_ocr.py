"""Line reconstruction, pixel projection and the projection product reader."""

import numpy as np
from PIL import Image

from label_extraction.extraction.advanced_ocr import EMPTY_RESULT, ProjectionReader, clean_band_text
from label_extraction.extraction.label_record import ProductLine
from label_extraction.ocr_engine import OCRResult, OCRWord, Region, TextBand, find_text_bands, reconstruct_lines
from label_extraction.utils.exceptions import OCRProcessingError


class FakeBandEngine:
    """Renders a fixed image and returns canned text per recognized band."""

    def __init__(self, image: Image.Image, texts):
        self.image = image
        self.texts = iter(texts)

    def render(self, page_bytes, height=None):
        return self.image

    def read_image_text(self, image, psm=None):
        return next(self.texts, "")


class BrokenEngine:
    def render(self, page_bytes, height=None):
        raise OCRProcessingError("page", "render failed")


def _page_with_rows(*rows) -> Image.Image:
    pixels = np.full((1000, 400, 3), 255, dtype=np.uint8)
    for top, bottom in rows:
        pixels[top:bottom] = 0
    return Image.fromarray(pixels)


def test_words_are_grouped_into_lines_by_position() -> None:
    words = [
        OCRWord("Kart", (60, 12, 90, 20)),
        OCRWord("Shoppers", (0, 10, 50, 20)),
        OCRWord("COD", (0, 40, 30, 50)),
    ]
    lines = reconstruct_lines(words, tolerance=5)

    assert [line.text for line in lines] == ["Shoppers Kart", "COD"]
    assert OCRResult(words=words, lines=lines).line_texts == ["Shoppers Kart", "COD"]


def test_empty_result_falls_back_to_raw_text() -> None:
    result = OCRResult(raw_text="DELHIVERY")
    assert result.text == "DELHIVERY"
    assert not result.is_empty()


def test_region_box_is_clamped_to_image() -> None:
    assert Region(0.0, 0.0, 0.5, 0.15).box(1000, 2000) == (0, 0, 500, 300)
    assert Region(0.5, 0.9, 1.0, 1.0).box(1000, 2000) == (500, 1800, 1000, 2000)


def test_find_text_bands() -> None:
    gray = np.full((100, 200), 255, dtype=np.uint8)
    gray[20:40] = 0
    gray[60:65] = 0  # too thin, noise
    gray[85:] = 0

    assert find_text_bands(gray) == [TextBand(top=20, height=20), TextBand(top=85, height=15)]


def test_clean_band_text() -> None:
    assert clean_band_text("[4 | Garden Manual Sprayer QTY -1") == "Garden Manual Sprayer"


def test_projection_reads_row_below_item_header() -> None:
    # Rows at 20-40 and 80-100 inside the 35%-55% crop
    image = _page_with_rows((370, 390), (430, 450))
    engine = FakeBandEngine(image, ["Item description", "1 Garden Manual Sprayer QTY-1"])

    result = ProjectionReader(ocr_engine=engine).read(b"%PDF")

    assert result.products == [ProductLine("Garden Manual Sprayer")]
    assert result.courier_name == "Amazon Shipping"


def test_projection_without_header_finds_nothing() -> None:
    image = _page_with_rows((370, 390), (430, 450))
    engine = FakeBandEngine(image, ["Ship To", "Priya Nair"])

    assert ProjectionReader(ocr_engine=engine).read(b"%PDF") == EMPTY_RESULT


def test_projection_errors_give_empty_result() -> None:
    assert ProjectionReader(ocr_engine=BrokenEngine()).read(b"%PDF") == EMPTY_RESULT
