"""
Custom Exceptions Module.

Exceptions raised inside the label extraction engine. Only input errors
are allowed to reach the orchestrator, which turns them into an empty
LabelRecord; OCR errors are absorbed by the text acquisition layer.

Exception Hierarchy:
    LabelExtractionError (base)
    ├── InputError
    │   └── CorruptedFileError
    └── OCRError
        ├── OCREngineNotAvailableError
        └── OCRProcessingError
"""


class LabelExtractionError(Exception):
    """
    Base exception for all label extraction errors.

    Attributes:
        message: Human-readable error message.
        details: Optional dictionary with additional error details.
    """

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# INPUT ERRORS
# =============================================================================

class InputError(LabelExtractionError):
    """Base exception for page input errors."""
    pass


class CorruptedFileError(InputError):
    """Raised when page bytes cannot be opened as a PDF."""

    def __init__(self, source: str, reason: str = None):
        message = f"Corrupted or unreadable page: {source}"
        details = {"source": source, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# OCR ERRORS
# =============================================================================

class OCRError(LabelExtractionError):
    """Base exception for OCR-related errors."""
    pass


class OCREngineNotAvailableError(OCRError):
    """Raised when the Tesseract binary or bindings are missing."""

    def __init__(self, engine_name: str):
        message = f"OCR engine not available: {engine_name}"
        details = {"engine": engine_name}
        super().__init__(message, details)


class OCRProcessingError(OCRError):
    """Raised when rendering or recognizing a page region fails."""

    def __init__(self, region: str, reason: str = None):
        message = f"OCR processing failed for region: {region}"
        details = {"region": region, "reason": reason}
        super().__init__(message, details)


__all__ = [
    'LabelExtractionError',
    'InputError',
    'CorruptedFileError',
    'OCRError',
    'OCREngineNotAvailableError',
    'OCRProcessingError',
]
