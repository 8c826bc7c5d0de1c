"""
Logging Configuration Module.

Console (colour) and rotating file logging for the label extraction engine.
Batch extraction runs pages on worker threads, so every record is tagged
with the page currently being processed (``%(page)s`` in the format).

Usage:
    from label_extraction.utils.logger import setup_logger, get_logger, page_context

    setup_logger(level="DEBUG")
    logger = get_logger(__name__)

    with page_context("labels.pdf#3"):
        logger.info("Resolving courier...")
"""

import logging
import logging.handlers
import sys
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import colorama
from colorama import Fore, Style

colorama.init()

# Root of the engine's logger hierarchy
LOGGER_NAMESPACE = "label_extraction"

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(page)s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
NO_PAGE = "-"

_page_state = threading.local()


@contextmanager
def page_context(label: str) -> Iterator[None]:
    """
    Tag log records emitted by the current thread with a page label.

    Contexts nest; the previous label is restored on exit.

    Args:
        label: Page identifier shown in ``%(page)s``.
    """
    previous = getattr(_page_state, 'label', NO_PAGE)
    _page_state.label = label
    try:
        yield
    finally:
        _page_state.label = previous


def current_page() -> str:
    """Page label of the calling thread, "-" outside any page."""
    return getattr(_page_state, 'label', NO_PAGE)


class PageContextFilter(logging.Filter):
    """Adds the ``page`` attribute used by the log format."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.page = current_page()
        return True


class ColoredFormatter(logging.Formatter):
    """
    Formatter that colours console output by level.

    Colors:
        - DEBUG: Cyan
        - INFO: Green
        - WARNING: Yellow
        - ERROR/CRITICAL: Red (CRITICAL bold)
    """

    COLORS = {
        logging.DEBUG: Fore.CYAN,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.RED + Style.BRIGHT,
    }

    def format(self, record: logging.LogRecord) -> str:
        return f"{self.COLORS.get(record.levelno, '')}{super().format(record)}{Style.RESET_ALL}"


def _make_handler(
    handler: logging.Handler,
    level: int,
    formatter: logging.Formatter
) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(PageContextFilter())
    return handler


def setup_logger(
    level: str = "INFO",
    log_format: Optional[str] = None,
    date_format: Optional[str] = None,
    log_file: Optional[str] = None,
    max_bytes: int = 10485760,  # 10 MB
    backup_count: int = 5,
    colorize: bool = True
) -> logging.Logger:
    """
    Configure the ``label_extraction`` logger.

    Console output goes to stderr so that the CLI can print JSON records on
    stdout. Calling it again replaces the previous handlers.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Record format; may use ``%(page)s``.
        date_format: ``asctime`` format.
        log_file: Rotating log file path, None to disable file logging.
        max_bytes: Size at which the log file rotates.
        backup_count: Rotated files to keep.
        colorize: Colour console output by level.

    Returns:
        The configured namespace logger.
    """
    log_format = log_format or DEFAULT_FORMAT
    date_format = date_format or DEFAULT_DATE_FORMAT
    numeric_level = getattr(logging, level.upper())

    root_logger = logging.getLogger(LOGGER_NAMESPACE)
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_formatter_class = ColoredFormatter if colorize else logging.Formatter
    root_logger.addHandler(_make_handler(
        logging.StreamHandler(sys.stderr),
        numeric_level,
        console_formatter_class(log_format, datefmt=date_format)
    ))

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        root_logger.addHandler(_make_handler(
            logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding='utf-8'
            ),
            numeric_level,
            logging.Formatter(log_format, datefmt=date_format)
        ))

    root_logger.propagate = False

    root_logger.debug(f"Logging initialized at {level.upper()}")
    return root_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a module logger under the ``label_extraction`` namespace.

    Args:
        name: Typically ``__name__``.
    """
    if name.startswith(LOGGER_NAMESPACE):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


def setup_logger_from_config() -> logging.Logger:
    """Initialize logging from the ``logging.*`` configuration keys."""
    from config import get_config

    log_file = get_config("logging.file.path") if get_config("logging.file.enabled", False) else None

    return setup_logger(
        level=get_config("logging.level", "INFO"),
        log_format=get_config("logging.format"),
        date_format=get_config("logging.date_format"),
        log_file=log_file,
        max_bytes=get_config("logging.file.max_bytes", 10485760),
        backup_count=get_config("logging.file.backup_count", 5),
        colorize=get_config("logging.console.colorize", True)
    )
