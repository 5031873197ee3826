"""CLI tests for the recycle bin commands."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from todolist_service.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_env(tmp_config):
    return tmp_config


def _add(title: str) -> str:
    result = runner.invoke(app, ["tasks", "add", title, "-o", "json"])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)["id"]


def _trash() -> list[dict]:
    result = runner.invoke(app, ["trash", "list", "-o", "json"])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


def _delete(*task_ids: str) -> None:
    result = runner.invoke(app, ["tasks", "delete", *task_ids])
    assert result.exit_code == 0, result.output


def test_trash_list_empty():
    assert _trash() == []


def test_deleted_tasks_show_up_in_trash():
    kept, binned = _add("Keep"), _add("Bin")
    _delete(binned)

    assert [t["id"] for t in _trash()] == [binned]
    assert kept not in [t["id"] for t in _trash()]


def test_restore_brings_task_back():
    task_id = _add("Oops")
    _delete(task_id)

    result = runner.invoke(app, ["trash", "restore", task_id])

    assert result.exit_code == 0, result.output
    assert "1 of 1" in result.output
    assert _trash() == []


def test_restore_active_task_is_not_found():
    task_id = _add("Still here")

    result = runner.invoke(app, ["trash", "restore", task_id])

    assert result.exit_code == 5


def test_restore_partial():
    a, b = _add("a"), _add("b")
    _delete(a)

    result = runner.invoke(app, ["trash", "restore", a, b])

    assert result.exit_code == 0, result.output
    assert "1 of 2" in result.output


def test_purge_single_with_force():
    task_id = _add("Gone")
    _delete(task_id)

    result = runner.invoke(app, ["trash", "purge", task_id, "--force"])

    assert result.exit_code == 0, result.output
    assert "permanently deleted" in result.output
    assert _trash() == []
    shown = runner.invoke(app, ["tasks", "show", task_id])
    assert shown.exit_code == 5


def test_purge_all_confirmed():
    ids = [_add(f"t{n}") for n in range(3)]
    _delete(*ids)

    result = runner.invoke(app, ["trash", "purge", "--all"], input="y\n")

    assert result.exit_code == 0, result.output
    assert "3 task(s) permanently deleted" in result.output
    assert _trash() == []


def test_purge_cancelled_keeps_tasks():
    task_id = _add("Maybe")
    _delete(task_id)

    result = runner.invoke(app, ["trash", "purge", "--all"], input="n\n")

    assert result.exit_code == 0
    assert "Cancelled" in result.output
    assert len(_trash()) == 1


def test_purge_all_on_empty_bin():
    result = runner.invoke(app, ["trash", "purge", "--all"])

    assert result.exit_code == 0
    assert "already empty" in result.output


@pytest.mark.parametrize("args", [[], ["some-id", "--all"]])
def test_purge_needs_ids_or_all(args):
    result = runner.invoke(app, ["trash", "purge", *args, "--force"])

    assert result.exit_code == 2


def test_purge_unknown_id_is_not_found():
    result = runner.invoke(app, ["trash", "purge", "no-such-task", "--force"])

    assert result.exit_code == 5
