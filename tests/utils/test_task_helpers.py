"""Tests for task ID suffix resolution."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from todolist_service.models import TaskCreate
from todolist_service.utils.task_helpers import (
    AmbiguousTaskIdError,
    resolve_task_id,
    resolve_task_ids,
)

OWNER = "owner-1"


def _task(task_id: str) -> MagicMock:
    task = MagicMock()
    task.id = task_id
    return task


def _service(active: list[str], deleted: list[str] = ()) -> MagicMock:
    service = MagicMock()
    service.find_task = AsyncMock(return_value=None)
    service.list_active_tasks = AsyncMock(return_value=[_task(i) for i in active])
    service.list_deleted_tasks = AsyncMock(return_value=[_task(i) for i in deleted])
    return service


@pytest.mark.asyncio
async def test_full_id_is_returned_without_listing():
    service = _service([])
    service.find_task = AsyncMock(return_value=_task("abc-123"))

    assert await resolve_task_id(service, OWNER, "abc-123") == "abc-123"
    service.find_task.assert_awaited_once_with(OWNER, "abc-123")
    service.list_active_tasks.assert_not_called()


@pytest.mark.asyncio
async def test_unique_suffix():
    service = _service(["aaa-111", "bbb-222"])

    assert await resolve_task_id(service, OWNER, "222") == "bbb-222"


@pytest.mark.asyncio
async def test_suffix_matches_recycle_bin():
    service = _service(["aaa-111"], deleted=["ccc-333"])

    assert await resolve_task_id(service, OWNER, "333") == "ccc-333"


@pytest.mark.asyncio
async def test_ambiguous_suffix():
    service = _service(["aaa-121", "bbb-221"])

    with pytest.raises(AmbiguousTaskIdError, match="matches 2 tasks"):
        await resolve_task_id(service, OWNER, "21")


@pytest.mark.asyncio
async def test_no_match_returns_input():
    service = _service(["aaa-111"])

    assert await resolve_task_id(service, OWNER, "zzz") == "zzz"


@pytest.mark.asyncio
async def test_resolve_many_keeps_order():
    service = _service(["aaa-111", "bbb-222"])

    assert await resolve_task_ids(service, OWNER, ["222", "111", "x"]) == [
        "bbb-222",
        "aaa-111",
        "x",
    ]


@pytest.mark.asyncio
async def test_with_real_service(service):
    task = await service.create_task(OWNER, TaskCreate(title="Real"))

    assert await resolve_task_id(service, OWNER, task.id[-6:]) == task.id
    assert await resolve_task_id(service, "someone-else", task.id[-6:]) == task.id[-6:]


@pytest.mark.asyncio
async def test_suffix_lookup_logs_no_missing_task_warning(service):
    task = await service.create_task(OWNER, TaskCreate(title="Quiet"))

    with patch.object(service.logger, "warning") as warning:
        assert await resolve_task_id(service, OWNER, task.id[-4:]) == task.id

    warning.assert_not_called()
