"""Tests for the application logger and exit code helpers."""

import logging.handlers

from tasklite.utils.exit_codes import ERROR_NETWORK, exit_code_name
from tasklite.utils.logger import LOG_DIR_ENV, get_logger, log_path


def test_log_path_honours_env(monkeypatch, tmp_path):
    monkeypatch.setenv(LOG_DIR_ENV, str(tmp_path))
    assert log_path() == tmp_path / "tasklite.log"


def test_child_loggers_share_the_file_handler():
    child = get_logger("board")

    assert child.name == "tasklite.board"
    assert child.parent is get_logger()
    assert any(
        isinstance(h, logging.handlers.RotatingFileHandler) for h in get_logger().handlers
    )
    assert not get_logger().propagate


def test_exit_code_name():
    assert exit_code_name(ERROR_NETWORK) == "ERROR_NETWORK"
    assert exit_code_name(99) == "UNKNOWN(99)"
