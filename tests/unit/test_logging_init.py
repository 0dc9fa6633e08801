from __future__ import annotations

import logging
from io import StringIO

import inventory_import.logging.init as log_init
from inventory_import.logging.init import (
    APP_LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    get_logger,
    log_summary,
    setup_logging,
)


def test_setup_logging_creates_logger_with_labeled_formatter():
    log_init.reset_logging()
    logger = setup_logging()
    assert logger.name == APP_LOGGER_NAME
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_setup_logging_is_idempotent():
    log_init.reset_logging()
    assert setup_logging() is setup_logging()
    assert get_logger() is setup_logging()
    assert len(logging.getLogger(APP_LOGGER_NAME).handlers) == 1


def test_labeled_prefixes():
    captured = StringIO()
    logger = logging.getLogger("test_inventory_import_labels")
    logger.setLevel(logging.INFO)
    for h in logger.handlers[:]:
        logger.removeHandler(h)
    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    handler = logging.StreamHandler(captured)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    logger.info("info message")
    logger.warning("warning message")
    logger.error("error message")
    logger.log(SUMMARY_LEVEL, "files=1/1")

    lines = captured.getvalue().splitlines()
    assert lines == ["INFO info message", "WARN warning message", "ERROR error message", "SUMMARY files=1/1"]


def test_child_module_loggers_reach_app_handler(capsys):
    log_init.reset_logging()
    setup_logging()
    logging.getLogger(f"{APP_LOGGER_NAME}.core.engine").warning("row 3 skipped")
    log_summary("files=0/0")
    out = capsys.readouterr().out
    assert "WARN row 3 skipped" in out
    assert "SUMMARY files=0/0" in out


def test_setup_logging_writes_to_given_stream(capsys):
    log_init.reset_logging()
    stream = StringIO()
    setup_logging(stream)
    log_summary("files=1/1")
    assert stream.getvalue() == "SUMMARY files=1/1\n"
    assert capsys.readouterr().out == ""
    log_init.reset_logging()
