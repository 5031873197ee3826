"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from the real config, data and log
directories, plus ready-made in-memory stores and services.
"""

from __future__ import annotations

import logging
import logging.handlers
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

import pytest

from todolist_service.adapters.sqlite import SqliteTaskRepository, connect
from todolist_service.services.task_service import TaskService


class FakeClock:
    """Callable clock that tests move forward explicitly."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------


def _drop_file_handlers() -> None:
    """Detach and close the app's log file handlers, leaving others alone."""
    logger = logging.getLogger("todolist_service")
    for handler in list(logger.handlers):
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            logger.removeHandler(handler)
            handler.close()


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path_factory):
    """Send log output to a temp dir and reset the logger singleton."""
    import todolist_service.utils.logger as logger_mod

    log_dir = tmp_path_factory.mktemp("logs")
    logger_mod._logger = None
    _drop_file_handlers()

    with patch("todolist_service.utils.logger.user_log_dir", return_value=str(log_dir)):
        yield log_dir

    _drop_file_handlers()
    logger_mod._logger = None


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory.

    Patches platform dirs so config/data files land in *tmp_path* only.
    Also clears the lru_cache so each test gets a fresh service instance.
    """
    from todolist_service.services.config_service import ConfigService, get_config_service

    tmpdir = str(tmp_path)
    get_config_service.cache_clear()
    with (
        patch("todolist_service.services.config_service.user_config_dir", return_value=tmpdir),
        patch("todolist_service.services.config_service.user_data_dir", return_value=tmpdir),
    ):
        yield ConfigService()
    get_config_service.cache_clear()


# ---------------------------------------------------------------------------
# Store and service
# ---------------------------------------------------------------------------


@pytest.fixture()
def connection():
    """Fresh in-memory database with every migration applied."""
    conn = connect(":memory:")
    yield conn
    conn.close()


@pytest.fixture()
def repository(connection):
    return SqliteTaskRepository(connection)


@pytest.fixture()
def clock():
    # A Wednesday
    return FakeClock(datetime(2024, 5, 15, 12, 0, tzinfo=UTC))


@pytest.fixture()
def service(repository, clock):
    return TaskService(repository, clock=clock)
