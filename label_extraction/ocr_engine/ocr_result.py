"""
OCR Result Data Classes.

This module defines data structures for OCR output, providing
a standardized format for recognized words and reconstructed lines.

Classes:
    OCRWord: Individual word with bounding box
    OCRLine: Line of text containing multiple words
    OCRResult: Complete OCR output for one page region

Author: ML Engineering Team
"""

from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass
class OCRWord:
    """
    Represents a single word/token recognized by OCR.

    Attributes:
        text: The recognized text content
        bbox: Bounding box as (x1, y1, x2, y2) in pixels of the region
        confidence: OCR confidence score (0-100)

    Example:
        >>> word = OCRWord(text="DELHIVERY", bbox=(100, 50, 260, 80), confidence=91.0)
    """
    text: str
    bbox: Tuple[int, int, int, int]  # (x1, y1, x2, y2)
    confidence: float = 0.0

    @property
    def x1(self) -> int:
        """Left coordinate."""
        return self.bbox[0]

    @property
    def y1(self) -> int:
        """Top coordinate."""
        return self.bbox[1]

    @property
    def x2(self) -> int:
        """Right coordinate."""
        return self.bbox[2]

    @property
    def y2(self) -> int:
        """Bottom coordinate."""
        return self.bbox[3]

    def __repr__(self) -> str:
        return f"OCRWord('{self.text}', bbox={self.bbox}, conf={self.confidence:.1f})"


@dataclass
class OCRLine:
    """
    A line of words sharing (roughly) the same vertical position.

    Attributes:
        words: Words in left-to-right order
        top: Vertical anchor of the line (top of its first word)
    """
    words: List[OCRWord] = field(default_factory=list)
    top: int = 0

    @property
    def text(self) -> str:
        """Words joined by single spaces."""
        return ' '.join(word.text for word in self.words)

    @property
    def average_confidence(self) -> float:
        if not self.words:
            return 0.0
        return sum(w.confidence for w in self.words) / len(self.words)


def reconstruct_lines(words: List[OCRWord], tolerance: int = 5) -> List[OCRLine]:
    """
    Bucket words into lines by their top coordinate.

    Words are visited top-to-bottom; a word joins the current bucket while
    its top edge is within ``tolerance`` pixels of the bucket anchor,
    otherwise it opens a new bucket. Each bucket is ordered left-to-right.

    Args:
        words: Positioned words in any order.
        tolerance: Maximum vertical distance for two words to share a line.

    Returns:
        Lines ordered top-to-bottom.

    Example:
        >>> words = [OCRWord("Kart", (60, 12, 90, 20)), OCRWord("Shoppers", (0, 10, 50, 20))]
        >>> [line.text for line in reconstruct_lines(words)]
        ['Shoppers Kart']
    """
    lines: List[OCRLine] = []

    for word in sorted(words, key=lambda w: (w.y1, w.x1)):
        if lines and abs(word.y1 - lines[-1].top) <= tolerance:
            lines[-1].words.append(word)
        else:
            lines.append(OCRLine(words=[word], top=word.y1))

    for line in lines:
        line.words.sort(key=lambda w: w.x1)

    return lines


@dataclass
class OCRResult:
    """
    Complete OCR result for a single page region.

    Attributes:
        words: All recognized words with bounding boxes
        lines: Lines reconstructed from word positions
        raw_text: Plain text as returned by the engine
        image_width: Width of the recognized image in pixels
        image_height: Height of the recognized image in pixels
        engine: OCR engine name
        processing_time: Time taken for OCR in seconds
    """
    words: List[OCRWord] = field(default_factory=list)
    lines: List[OCRLine] = field(default_factory=list)
    raw_text: str = ""
    image_width: int = 0
    image_height: int = 0
    engine: str = "unknown"
    processing_time: float = 0.0

    @property
    def text(self) -> str:
        """
        Full text content.

        Reconstructed lines win over the engine's raw text because they
        follow the visual layout rather than Tesseract's block order.
        """
        if self.lines:
            return '\n'.join(line.text for line in self.lines)
        return self.raw_text

    @property
    def line_texts(self) -> List[str]:
        """Trimmed non-empty line strings, top-to-bottom."""
        return [line.text.strip() for line in self.lines if line.text.strip()]

    @property
    def word_count(self) -> int:
        return len(self.words)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def average_confidence(self) -> float:
        if not self.words:
            return 0.0
        return sum(w.confidence for w in self.words) / len(self.words)

    def is_empty(self) -> bool:
        """Check if OCR result carries no text at all."""
        return not self.words and not self.raw_text.strip()

    def __repr__(self) -> str:
        return (
            f"OCRResult(words={self.word_count}, lines={self.line_count}, "
            f"confidence={self.average_confidence:.1f}%)"
        )
