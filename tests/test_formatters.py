"""Tests for output formatters."""

import json
from datetime import UTC, datetime

import pytest

from tasklite.models import Project, Task, TaskStatus, Toast, ToastSeverity
from tasklite.utils.ui.formatters import (
    format_board,
    format_output,
    format_projects_table,
    format_toast,
)

STAMP = datetime(2024, 3, 1, tzinfo=UTC)


def test_format_output_json(capsys):
    format_output([{"id": "p1"}], "json")
    assert json.loads(capsys.readouterr().out) == [{"id": "p1"}]


def test_format_output_yaml(capsys):
    format_output({"id": "p1"}, "yaml")
    assert "id: p1" in capsys.readouterr().out


def test_format_output_unknown():
    with pytest.raises(ValueError):
        format_output({}, "xml")


def test_projects_table(capsys):
    format_projects_table(
        [Project(id="p1", name="Home", created_at=STAMP, updated_at=STAMP)]
    )
    out = capsys.readouterr().out
    assert "Home" in out
    assert "Mar 1, 2024" in out


def test_board_lists_columns(capsys):
    task = Task(id="t1", name="Write", tags=["docs"], created_at=STAMP, updated_at=STAMP)
    format_board({TaskStatus.TODO: [task], TaskStatus.IN_PROGRESS: [], TaskStatus.DONE: []})
    out = capsys.readouterr().out
    assert "Todo (1)" in out
    assert "No tasks" in out


@pytest.mark.parametrize(
    "severity, prefix",
    [
        (ToastSeverity.SUCCESS, "Success:"),
        (ToastSeverity.WARNING, "Warning:"),
        (ToastSeverity.ERROR, "Error:"),
    ],
)
def test_format_toast(capsys, severity, prefix):
    format_toast(Toast(id="1", severity=severity, message="Task updated"))
    assert f"{prefix} Task updated" in capsys.readouterr().out
