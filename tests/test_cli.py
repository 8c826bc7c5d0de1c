"""Command-line driver and configuration access."""

import logging

import pytest

from config import CONFIG_ENV_VAR, ConfigurationManager, get_config
from label_extraction.utils.logger import LOGGER_NAMESPACE
from main import collect_inputs, main


def test_collect_inputs_from_directory(tmp_path) -> None:
    (tmp_path / "b.PDF").write_bytes(b"%PDF")
    (tmp_path / "a.pdf").write_bytes(b"%PDF")
    (tmp_path / "notes.txt").write_text("skip me")

    assert [p.name for p in collect_inputs(str(tmp_path))] == ["a.pdf", "b.PDF"]


def test_collect_inputs_rejects_other_files(tmp_path) -> None:
    notes = tmp_path / "notes.txt"
    notes.write_text("skip me")

    with pytest.raises(ValueError):
        collect_inputs(str(notes))
    with pytest.raises(FileNotFoundError):
        collect_inputs(str(tmp_path / "missing"))


@pytest.fixture
def reset_logging():
    yield
    # main() binds a console handler to the captured stderr
    logging.getLogger(LOGGER_NAMESPACE).handlers.clear()


def test_main_reports_missing_input(tmp_path, capsys, reset_logging) -> None:
    assert main(["--input", str(tmp_path / "missing.pdf")]) == 1
    assert "Input path not found" in capsys.readouterr().err


def test_config_lookup_with_defaults() -> None:
    assert get_config("extraction.max_workers") == 3
    assert get_config("ocr.regions.brand_logo.height") == 0.15
    assert get_config("does.not.exist", "fallback") == "fallback"


@pytest.fixture
def fresh_config():
    ConfigurationManager.reset()
    yield
    ConfigurationManager.reset()


def test_config_file_from_environment(tmp_path, monkeypatch, fresh_config) -> None:
    settings = tmp_path / "settings.yaml"
    settings.write_text("extraction:\n  max_workers: 8\nlogging:\n  file:\n    path: logs/run.log\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(settings))

    assert get_config("extraction.max_workers") == 8
    assert get_config("extraction.max_workers.nested", "fallback") == "fallback"
    assert get_config("logging.file.path").endswith("run.log")
    assert get_config("logging.file.path") != "logs/run.log"


def test_missing_config_file(tmp_path, fresh_config) -> None:
    with pytest.raises(FileNotFoundError):
        ConfigurationManager(str(tmp_path / "absent.yaml"))
