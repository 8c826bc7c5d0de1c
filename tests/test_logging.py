"""Per-page log context used by batch extraction."""

import logging
import threading

from label_extraction.utils.logger import (
    LOGGER_NAMESPACE,
    PageContextFilter,
    current_page,
    get_logger,
    page_context,
)


def test_page_context_nests_and_restores() -> None:
    assert current_page() == "-"
    with page_context("a.pdf"):
        with page_context("b.pdf"):
            assert current_page() == "b.pdf"
        assert current_page() == "a.pdf"
    assert current_page() == "-"


def test_page_context_is_per_thread() -> None:
    seen = []
    with page_context("main.pdf"):
        worker = threading.Thread(target=lambda: seen.append(current_page()))
        worker.start()
        worker.join()
    assert seen == ["-"]


def test_filter_adds_page_attribute() -> None:
    record = logging.LogRecord(LOGGER_NAMESPACE, logging.INFO, __file__, 1, "msg", None, None)
    with page_context("labels.pdf"):
        assert PageContextFilter().filter(record)
    assert record.page == "labels.pdf"


def test_module_loggers_live_under_namespace() -> None:
    assert get_logger("tests.module").name == f"{LOGGER_NAMESPACE}.tests.module"
    assert get_logger(f"{LOGGER_NAMESPACE}.extraction").name == f"{LOGGER_NAMESPACE}.extraction"
