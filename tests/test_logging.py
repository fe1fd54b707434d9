"""
Tests for logging setup.
"""

import logging

import pytest

from catalog_sync.logging import setup_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def own_handlers(root):
    return [h for h in root.handlers if getattr(h, "_catalog_sync", False)]


def test_repeated_setup_does_not_duplicate_handlers(root_logger):
    setup_logging("INFO")
    setup_logging("DEBUG")

    assert len(own_handlers(root_logger)) == 1
    assert root_logger.level == logging.DEBUG


def test_file_handler_writes_log(root_logger, tmp_path):
    log_file = tmp_path / "logs" / "sync.log"
    setup_logging("INFO", str(log_file))

    logging.getLogger("catalog_sync.test").info("hello from the sync job")
    for handler in own_handlers(root_logger):
        handler.flush()

    assert len(own_handlers(root_logger)) == 2
    assert "hello from the sync job" in log_file.read_text()
