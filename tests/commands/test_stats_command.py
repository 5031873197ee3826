"""CLI tests for the statistics commands."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from todolist_service.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_env(tmp_config):
    return tmp_config


def _add(title: str, *extra: str) -> str:
    result = runner.invoke(app, ["tasks", "add", title, *extra, "-o", "json"])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)["id"]


def test_statistics_json():
    done = _add("Done", "-c", "work", "-p", "3")
    _add("Open", "-c", "work")
    binned = _add("Binned")
    runner.invoke(app, ["tasks", "toggle", done])
    runner.invoke(app, ["tasks", "delete", binned])

    result = runner.invoke(app, ["stats", "show", "-o", "json"])

    assert result.exit_code == 0, result.output
    stats = json.loads(result.output)
    assert stats["total_count"] == 2
    assert stats["completed_count"] == 1
    assert stats["deleted_count"] == 1
    assert stats["completion_rate"] == 50.0
    assert stats["current_completion_streak"] == 1
    assert stats["priority_stats"]["high"] == 1
    assert stats["category_stats"][0]["category"] == "work"


def test_statistics_pretty_on_empty_store():
    result = runner.invoke(app, ["stats", "show"])

    assert result.exit_code == 0, result.output
    assert "Statistics" in result.output
    assert "0.0%" in result.output


def test_categories():
    _add("a", "-c", "work")
    _add("b", "-c", "home")
    _add("c", "-c", "work")

    result = runner.invoke(app, ["stats", "categories", "-o", "json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == ["home", "work"]
