from __future__ import annotations

import logging
from io import StringIO

from inventory_io.logging.init import (
    LabeledFormatter,
    get_logger,
    log_summary,
    reset_logging,
    set_debug,
    setup_logging,
)


def test_setup_logging_creates_logger_with_labeled_formatter(clean_logging):
    logger = setup_logging()
    assert logger.name == "inventory_io"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_setup_logging_is_idempotent(clean_logging):
    first = setup_logging()
    assert setup_logging() is first
    assert get_logger() is first
    assert len(first.handlers) == 1


def test_logging_labeled_prefixes():
    captured_output = StringIO()
    logger = logging.getLogger("test_inventory_io_labels")
    logger.setLevel(logging.INFO)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logging.addLevelName(25, "SUMMARY")
    handler = logging.StreamHandler(captured_output)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")
    logger.log(25, "Test summary message")

    lines = captured_output.getvalue().strip().split("\n")
    assert lines == [
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
        "SUMMARY Test summary message",
    ]


def test_log_summary_goes_to_stdout(clean_logging, capsys):
    log_summary("file=a.csv rows=0")
    assert "SUMMARY file=a.csv rows=0" in capsys.readouterr().out


def test_child_logger_propagates_and_debug_toggle(clean_logging, capsys):
    logger = setup_logging()
    child = logging.getLogger("inventory_io.services.importer")
    child.debug("hidden")
    set_debug(logger)
    child.debug("shown")
    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "DEBUG shown" in out
    reset_logging()
