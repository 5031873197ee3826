"""Unit tests for SqliteTaskRepository.

Uses a real in-memory SQLite database with the full migration schema
applied, so we test the real SQL without touching production data.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from todolist_service.exceptions import StaleTaskError, StoreError
from todolist_service.models import Priority, SortField, Task, TaskFilters

OWNER = "owner-1"
OTHER = "owner-2"
BASE = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)


def _task(n: int, owner_id: str = OWNER, **overrides) -> Task:
    created = BASE + timedelta(minutes=n)
    data = {
        "id": f"task-{owner_id}-{n:03d}",
        "owner_id": owner_id,
        "title": f"Task {n}",
        "created_at": created,
        "updated_at": created,
    }
    data.update(overrides)
    return Task(**data)


def _completed(n: int, owner_id: str = OWNER, **overrides) -> Task:
    at = BASE + timedelta(hours=n)
    return _task(n, owner_id, is_completed=True, completed_at=at, **overrides)


async def _seed(repository, *tasks: Task) -> None:
    for task in tasks:
        await repository.add(task)


# ---------------------------------------------------------------------------
# add / get
# ---------------------------------------------------------------------------


class TestAddAndGet:
    @pytest.mark.asyncio
    async def test_round_trip_preserves_fields(self, repository):
        task = _completed(
            1, description="Details", priority=Priority.HIGH, category="work"
        )
        await repository.add(task)

        loaded = await repository.get(OWNER, task.id)

        assert loaded == task
        assert loaded.created_at.tzinfo is not None
        assert loaded.is_completed is True

    @pytest.mark.asyncio
    async def test_get_is_owner_scoped(self, repository):
        task = _task(1)
        await repository.add(task)

        assert await repository.get(OTHER, task.id) is None

    @pytest.mark.asyncio
    async def test_get_unknown_id_returns_none(self, repository):
        assert await repository.get(OWNER, "missing") is None

    @pytest.mark.asyncio
    async def test_get_returns_deleted_task(self, repository):
        task = _task(1, is_deleted=True)
        await repository.add(task)

        loaded = await repository.get(OWNER, task.id)
        assert loaded is not None and loaded.is_deleted

    @pytest.mark.asyncio
    async def test_duplicate_id_raises_store_error(self, repository):
        await repository.add(_task(1))

        with pytest.raises(StoreError):
            await repository.add(_task(1))

    @pytest.mark.asyncio
    async def test_closed_connection_raises_store_error(self, repository, connection):
        connection.close()

        with pytest.raises(StoreError):
            await repository.get(OWNER, "anything")


# ---------------------------------------------------------------------------
# list_all / count
# ---------------------------------------------------------------------------


class TestListAll:
    @pytest.mark.asyncio
    async def test_excludes_deleted_by_default(self, repository):
        await _seed(repository, _task(1), _task(2, is_deleted=True), _task(3))

        tasks = await repository.list_all(OWNER, TaskFilters())

        assert [t.id for t in tasks] == ["task-owner-1-003", "task-owner-1-001"]

    @pytest.mark.asyncio
    async def test_include_deleted(self, repository):
        await _seed(repository, _task(1), _task(2, is_deleted=True))

        tasks = await repository.list_all(OWNER, TaskFilters(include_deleted=True))

        assert len(tasks) == 2

    @pytest.mark.asyncio
    async def test_deleted_only(self, repository):
        await _seed(repository, _task(1), _task(2, is_deleted=True))

        tasks = await repository.list_all(OWNER, TaskFilters(deleted_only=True))

        assert [t.id for t in tasks] == ["task-owner-1-002"]

    @pytest.mark.asyncio
    async def test_never_returns_other_owners_tasks(self, repository):
        await _seed(repository, _task(1), _task(2, owner_id=OTHER))

        tasks = await repository.list_all(OWNER, TaskFilters(include_deleted=True))

        assert {t.owner_id for t in tasks} == {OWNER}

    @pytest.mark.asyncio
    async def test_filters_combine(self, repository):
        await _seed(
            repository,
            _completed(1, category="work", priority=Priority.HIGH),
            _task(2, category="work", priority=Priority.HIGH),
            _completed(3, category="home", priority=Priority.HIGH),
            _completed(4, category="work", priority=Priority.LOW),
        )
        filters = TaskFilters(
            is_completed=True, category="work", priority=Priority.HIGH
        )

        tasks = await repository.list_all(OWNER, filters)

        assert [t.id for t in tasks] == ["task-owner-1-001"]
        assert await repository.count(OWNER, filters) == 1

    @pytest.mark.asyncio
    async def test_title_sort_is_case_insensitive(self, repository):
        await _seed(
            repository,
            _task(1, title="banana"),
            _task(2, title="Apple"),
            _task(3, title="cherry"),
        )
        filters = TaskFilters(sort_by=SortField.TITLE, sort_ascending=True)

        tasks = await repository.list_all(OWNER, filters)

        assert [t.title for t in tasks] == ["Apple", "banana", "cherry"]

    @pytest.mark.asyncio
    async def test_ties_keep_insertion_order(self, repository):
        await _seed(
            repository,
            _task(1, priority=Priority.URGENT),
            _task(2, priority=Priority.NORMAL),
            _task(3, priority=Priority.URGENT),
        )
        filters = TaskFilters(sort_by=SortField.PRIORITY)

        tasks = await repository.list_all(OWNER, filters)

        assert [t.id[-3:] for t in tasks] == ["001", "003", "002"]

    @pytest.mark.asyncio
    async def test_limit_and_offset_slice_in_sort_order(self, repository):
        await _seed(repository, *(_task(n) for n in range(1, 8)))
        filters = TaskFilters(sort_ascending=True)

        page = await repository.list_all(OWNER, filters, limit=3, offset=3)

        assert [t.id[-3:] for t in page] == ["004", "005", "006"]

    @pytest.mark.asyncio
    async def test_offset_without_limit(self, repository):
        await _seed(repository, *(_task(n) for n in range(1, 5)))

        rest = await repository.list_all(
            OWNER, TaskFilters(sort_ascending=True), offset=2
        )

        assert [t.id[-3:] for t in rest] == ["003", "004"]


# ---------------------------------------------------------------------------
# save / save_many
# ---------------------------------------------------------------------------


class TestSave:
    @pytest.mark.asyncio
    async def test_save_persists_and_bumps_version(self, repository):
        task = _task(1)
        await repository.add(task)

        saved = await repository.save(task.model_copy(update={"title": "Renamed"}))

        assert saved.version == 2
        assert await repository.get(OWNER, task.id) == saved

    @pytest.mark.asyncio
    async def test_stale_save_is_rejected(self, repository):
        task = _task(1)
        await repository.add(task)
        await repository.save(task.model_copy(update={"title": "First writer"}))

        with pytest.raises(StaleTaskError):
            await repository.save(task.model_copy(update={"title": "Second writer"}))

        assert (await repository.get(OWNER, task.id)).title == "First writer"

    @pytest.mark.asyncio
    async def test_save_cannot_touch_other_owners_row(self, repository):
        task = _task(1)
        await repository.add(task)

        with pytest.raises(StaleTaskError):
            await repository.save(task.model_copy(update={"owner_id": OTHER}))

    @pytest.mark.asyncio
    async def test_save_many_is_all_or_nothing(self, repository):
        first, second = _task(1), _task(2)
        await _seed(repository, first, second)
        await repository.save(second.model_copy(update={"title": "Moved on"}))

        with pytest.raises(StaleTaskError):
            await repository.save_many(
                [
                    first.model_copy(update={"is_deleted": True}),
                    second.model_copy(update={"is_deleted": True}),
                ]
            )

        assert (await repository.get(OWNER, first.id)).is_deleted is False

    @pytest.mark.asyncio
    async def test_save_many_empty(self, repository):
        assert await repository.save_many([]) == 0


# ---------------------------------------------------------------------------
# get_many / remove / remove_many
# ---------------------------------------------------------------------------


class TestBulkReadAndRemove:
    @pytest.mark.asyncio
    async def test_get_many_dedupes_and_skips_foreign(self, repository):
        mine, theirs = _task(1), _task(1, owner_id=OTHER)
        await _seed(repository, mine, theirs)

        tasks = await repository.get_many(OWNER, [mine.id, mine.id, theirs.id, "nope"])

        assert [t.id for t in tasks] == [mine.id]

    @pytest.mark.asyncio
    async def test_get_many_handles_large_id_lists(self, repository):
        tasks = [_task(n) for n in range(1, 11)]
        await _seed(repository, *tasks)
        ids = [t.id for t in tasks] + [f"missing-{n}" for n in range(1200)]

        assert len(await repository.get_many(OWNER, ids)) == 10

    @pytest.mark.asyncio
    async def test_remove_is_owner_scoped(self, repository):
        task = _task(1)
        await repository.add(task)

        assert await repository.remove(OTHER, task.id) is False
        assert await repository.remove(OWNER, task.id) is True
        assert await repository.get(OWNER, task.id) is None

    @pytest.mark.asyncio
    async def test_remove_many_counts_only_owned_rows(self, repository):
        await _seed(repository, _task(1), _task(2, is_deleted=True), _task(3, owner_id=OTHER))

        removed = await repository.remove_many(
            OWNER, ["task-owner-1-001", "task-owner-1-002", "task-owner-2-003"]
        )

        assert removed == 2
        assert await repository.get(OTHER, "task-owner-2-003") is not None


# ---------------------------------------------------------------------------
# snapshot / list_categories
# ---------------------------------------------------------------------------


class TestSnapshotAndCategories:
    @pytest.mark.asyncio
    async def test_snapshot_includes_deleted(self, repository):
        await _seed(repository, _task(1), _task(2, is_deleted=True), _task(3, owner_id=OTHER))

        tasks = await repository.snapshot(OWNER)

        assert [t.id[-3:] for t in tasks] == ["001", "002"]

    @pytest.mark.asyncio
    async def test_list_categories(self, repository):
        await _seed(
            repository,
            _task(1, category="work"),
            _task(2, category="home"),
            _task(3, category="work"),
            _task(4),
            _task(5, category="trash-only", is_deleted=True),
            _task(6, owner_id=OTHER, category="theirs"),
        )

        assert await repository.list_categories(OWNER) == ["home", "work"]


class TestClose:
    @pytest.mark.asyncio
    async def test_close_releases_connection(self, repository):
        await repository.close()

        with pytest.raises(StoreError):
            await repository.get(OWNER, "anything")
