# File: tests/test_logger.py
import logging
from logging.handlers import RotatingFileHandler

import pytest

from keyword_scout.logger import LOGGER_NAME, configure, init_logging


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    configure()


def test_init_logging_writes_to_file(tmp_path):
    log_file = tmp_path / "logs" / "run.log"
    lg = init_logging(level="debug", log_file=log_file, log_format="%(levelname)s %(message)s")

    assert lg.name == LOGGER_NAME
    assert lg.level == logging.DEBUG
    assert lg.propagate is False
    assert any(isinstance(h, RotatingFileHandler) for h in lg.handlers)

    lg.debug("Dispatched %s", "a.com")
    for handler in lg.handlers:
        handler.flush()
    assert "DEBUG Dispatched a.com" in log_file.read_text(encoding="utf-8")


def test_reconfigure_replaces_handlers():
    configure(level="INFO")
    lg = configure(level=logging.WARNING)
    assert len(lg.handlers) == 1
    assert lg.level == logging.WARNING


def test_unknown_level_rejected():
    with pytest.raises(ValueError):
        configure(level="LOUD")
