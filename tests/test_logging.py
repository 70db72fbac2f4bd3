from __future__ import annotations

import logging
from logging.handlers import TimedRotatingFileHandler

import pytest

from ddb_explorer.logging import setup_logging
from ddb_explorer.settings import Settings


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


def test_setup_logging_writes_to_rotating_file(tmp_path, restore_root_logger):
    settings = Settings(DDB_EXPLORER_LOG_DIR=tmp_path / "logs", DDB_EXPLORER_LOG_LEVEL="debug")

    log_file = setup_logging(settings)

    assert log_file == tmp_path / "logs" / "ddb_explorer.log"
    root = restore_root_logger
    assert len(root.handlers) == 1
    handler = root.handlers[0]
    assert isinstance(handler, TimedRotatingFileHandler)
    assert handler.backupCount == 7
    assert root.level == logging.DEBUG
    assert logging.getLogger("botocore").level == logging.WARNING

    logging.getLogger("ddb_explorer.test").info("hello from test")
    handler.flush()
    text = log_file.read_text(encoding="utf-8")
    assert "logging enabled" in text
    assert "| INFO | ddb_explorer.test | hello from test" in text


def test_setup_logging_twice_keeps_one_handler(tmp_path, restore_root_logger):
    settings = Settings(DDB_EXPLORER_LOG_DIR=tmp_path)
    setup_logging(settings)
    setup_logging(settings)
    assert len(restore_root_logger.handlers) == 1


def test_relative_log_dir_is_under_cwd(tmp_path, monkeypatch, restore_root_logger):
    monkeypatch.chdir(tmp_path)
    log_file = setup_logging(Settings(DDB_EXPLORER_LOG_DIR="nested/logs"))
    assert log_file == tmp_path / "nested" / "logs" / "ddb_explorer.log"
