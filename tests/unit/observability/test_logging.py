"""Tests for structured logging."""

import json
import logging

from nestflow.observability.logging import ContextLogger, setup_logging


def test_logging_setup():
    setup_logging(level="DEBUG")

    logger = logging.getLogger("nestflow")
    assert logger.level == logging.DEBUG


def test_logging_setup_accepts_lowercase_level():
    setup_logging(level="info")

    logger = logging.getLogger("nestflow")
    assert logger.level == logging.INFO


def test_nestflow_logger_does_not_propagate():
    setup_logging(level="WARNING")

    assert logging.getLogger("nestflow").propagate is False


def test_log_file_receives_json_lines(tmp_path):
    """Test records are written to the log file as JSON"""
    log_file = tmp_path / "nestflow.log"
    setup_logging(level="INFO", log_file=str(log_file))

    logging.getLogger("nestflow.test").info("hello file")
    for handler in logging.getLogger("nestflow").handlers:
        handler.flush()

    record = json.loads(log_file.read_text().strip().splitlines()[-1])
    assert record["message"] == "hello file"
    assert record["levelname"] == "INFO"

    setup_logging(level="WARNING")


def test_context_logger():
    setup_logging(level="INFO")
    context_logger = ContextLogger("nestflow.test")

    adapter = context_logger.with_context(conversation_id="conv_1", flow="main")

    assert isinstance(adapter, logging.LoggerAdapter)
    assert adapter.extra == {"conversation_id": "conv_1", "flow": "main"}


def test_context_logger_logging():
    """Test ContextLogger actually logs with context."""
    setup_logging(level="DEBUG")
    adapter = ContextLogger("nestflow.test").with_context(conversation_id="conv_1")

    # Should not raise
    adapter.info("Test message")
