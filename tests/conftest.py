"""Shared fixtures and fakes for the label extraction tests."""

import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from label_extraction.extraction.advanced_ocr import EMPTY_RESULT, ProjectionResult  # noqa: E402
from label_extraction.utils.exceptions import CorruptedFileError, OCRProcessingError  # noqa: E402


class FakeAcquisition:
    """Returns canned lines per page; unknown pages are unreadable."""

    def __init__(self, pages: Dict[bytes, List[str]]):
        self.pages = pages

    def acquire(self, page_bytes: bytes) -> List[str]:
        if page_bytes not in self.pages:
            raise CorruptedFileError("page", "not a PDF")
        return list(self.pages[page_bytes])


class FakeOCREngine:
    """Region OCR stub keyed by Region; ``fail`` makes every call raise."""

    def __init__(self, texts: Optional[dict] = None, fail: bool = False):
        self.texts = texts or {}
        self.fail = fail
        self.calls = 0

    def read_region_text(self, page_bytes, region, height=None) -> str:
        self.calls += 1
        if self.fail:
            raise OCRProcessingError("region", "tesseract crashed")
        return self.texts.get(region, "")


class FakeProjectionReader:
    def __init__(self, result: ProjectionResult = EMPTY_RESULT):
        self.result = result
        self.calls = 0

    def read(self, page_bytes: bytes) -> ProjectionResult:
        self.calls += 1
        return self.result


@pytest.fixture
def ocr_engine() -> FakeOCREngine:
    return FakeOCREngine()


@pytest.fixture
def projection_reader() -> FakeProjectionReader:
    return FakeProjectionReader()
