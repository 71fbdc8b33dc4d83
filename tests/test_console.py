from __future__ import annotations

import pytest

from taskboard.console import Console, normalize_status, render_tasks
from taskboard.controller import TaskController
from taskboard.store import TaskStore


@pytest.fixture()
def output() -> list[str]:
    return []


@pytest.fixture()
def console(controller: TaskController, output: list[str]) -> Console:
    controller.refresh()
    return Console(controller, output=output.append)


def test_render_shows_badges_and_form(controller: TaskController) -> None:
    controller.refresh()
    text = render_tasks(controller)
    assert "2  [in-progress] Fix authentication bug" in text
    assert "2025-08-23" in text
    assert text.endswith("new task: name='' description='' status=''")


def test_add_through_console(console: Console, store: TaskStore, output: list[str]) -> None:
    console.handle('new name "Ship release"')
    console.handle("new description 'Tag and publish'")
    console.handle("new status ip")
    console.handle("add")

    created = store.list_all()[-1]
    assert created.name == "Ship release"
    assert created.status == "In Progress"
    assert "[in-progress] Ship release" in output[-1]


def test_edit_and_save(console: Console, store: TaskStore) -> None:
    console.handle("edit 3")
    console.handle("set status done")
    console.handle("save")
    assert store.get_by_id("3").status == "Done"


def test_set_without_edit(console: Console, output: list[str]) -> None:
    console.handle("set name x")
    assert output[-1] == "Nothing is being edited."


def test_delete_and_unknown(console: Console, store: TaskStore, output: list[str]) -> None:
    console.handle("delete 1")
    assert len(store) == 4
    assert 'Task "Complete project documentation" deleted.' in output

    console.handle("frobnicate")
    assert output[-1].startswith("Unknown command")


def test_exit_stops_session(console: Console) -> None:
    assert console.handle("exit") is False
    assert console.handle("") is True


def test_run_reads_until_exit(controller: TaskController, output: list[str]) -> None:
    lines = iter(["list", "exit"])
    Console(controller, output=output.append, read=lambda prompt: next(lines)).run()
    assert output[-1] == "Goodbye."


def test_normalize_status() -> None:
    assert normalize_status("T") == "Todo"
    assert normalize_status("in progress") == "In Progress"
    with pytest.raises(ValueError):
        normalize_status("later")
