"""Tests for the application logger."""

from __future__ import annotations

import logging
import logging.handlers

import pytest

from todolist_service.utils.logger import get_logger


def _file_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [
        h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)
    ]


def _flush():
    for handler in logging.getLogger("todolist_service").handlers:
        handler.flush()


@pytest.fixture()
def foreign_handler():
    """A handler attached by someone else before the app logger is built."""
    handler = logging.NullHandler()
    logger = logging.getLogger("todolist_service")
    logger.addHandler(handler)
    yield handler
    logger.removeHandler(handler)


def test_root_logger_has_one_rotating_handler():
    logger = get_logger()
    get_logger()

    assert logger.name == "todolist_service"
    assert len(_file_handlers(logger)) == 1
    assert logger.propagate is False


def test_file_handler_added_next_to_existing_handlers(foreign_handler, isolated_logs):
    logger = get_logger()

    assert foreign_handler in logger.handlers
    assert len(_file_handlers(logger)) == 1

    get_logger("commands").info("still written")
    _flush()
    assert "still written" in (isolated_logs / "todolist.log").read_text()


def test_child_logger_name():
    assert get_logger("task_service").name == "todolist_service.task_service"


def test_records_land_in_log_file(isolated_logs):
    get_logger("task_service").info("owner %s created task %s", "o1", "t1")
    _flush()

    text = (isolated_logs / "todolist.log").read_text()
    assert "[todolist_service.task_service] owner o1 created task t1" in text
    assert "INFO" in text


def test_level_from_environment(monkeypatch):
    monkeypatch.setenv("TODOLIST_LOG_LEVEL", "warning")

    assert get_logger().level == logging.WARNING
