"""Tests for logging setup."""
import io
import logging

import pytest

from acousticzones.logging_config import setup_logging


def test_setup_logging_replaces_handlers(tmp_path):
    log_file = tmp_path / "run.log"
    stream = io.StringIO()
    setup_logging("debug", log_file=str(log_file), stream=stream)
    logger = setup_logging("debug", log_file=str(log_file), stream=stream)

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2

    logging.getLogger("acousticzones.model.state").info("deployed")
    assert "acousticzones.model.state - INFO - deployed" in stream.getvalue()
    for handler in logger.handlers:
        handler.flush()
    assert "deployed" in log_file.read_text(encoding="utf-8")


def test_unknown_level():
    with pytest.raises(ValueError):
        setup_logging("loud")
