# tests/test_console.py

from __future__ import annotations

import asyncio

import pytest

from todo_timer.console import handle_command, parse_task_id, render_task, resolve_task_id, run_console
from todo_timer.models import Task, TaskBoard
from todo_timer.services.task_list import TaskListClient

from .fakes import FakeSync


def test_render_timed_and_untimed_rows() -> None:
    assert render_task(Task(id=1, text="Plain")) == "1: Plain - 0 min [Delete]"
    assert (
        render_task(Task(id=2, text="Timed", is_timed=True, time_spent=5, is_running=True))
        == "2: Timed - 5 min [Pause] [End] [Delete]"
    )
    assert (
        render_task(Task(id=3, text="Paused", is_timed=True))
        == "3: Paused - 0 min [Resume] [End] [Delete]"
    )


def test_parse_task_id() -> None:
    assert parse_task_id(" 17 ") == 17
    assert parse_task_id("abc") == "abc"


def test_resolve_prefers_numeric_id_but_reaches_string_one() -> None:
    board = TaskBoard()
    board.append(Task(id="17", text="from another client"))
    assert resolve_task_id(board, "17") == "17"

    board.append(Task(id=17, text="numeric"))
    assert resolve_task_id(board, " 17 ") == 17
    assert resolve_task_id(board, "99") == 99


@pytest.mark.asyncio
async def test_delete_task_with_string_id() -> None:
    client = TaskListClient(TaskBoard(), FakeSync([Task(id="17", text="s"), Task(id=2, text="n")]))
    await client.load()

    output, keep_running = handle_command(client, "delete 17")

    assert keep_running
    assert client.board.ids() == [2]
    assert "не найдена" not in output


@pytest.mark.asyncio
async def test_commands_drive_client(client: TaskListClient, sync: FakeSync) -> None:
    output, keep_running = handle_command(client, "timed Write report")
    assert keep_running
    task = client.board.tasks[0]
    assert task.text == "Write report"
    assert task.is_timed is True
    assert "[Resume]" in output

    output, _ = handle_command(client, f"toggle {task.id}")
    assert task.is_running is True
    assert "[Pause]" in output

    handle_command(client, f"end {task.id}")
    assert task.is_running is False

    output, _ = handle_command(client, f"delete {task.id}")
    assert client.board.tasks == []
    assert output == "Задач нет"
    assert len(sync.snapshots) == 4


@pytest.mark.asyncio
async def test_command_errors_do_not_stop_console(client: TaskListClient) -> None:
    assert handle_command(client, "delete 404") == ("Задача 404 не найдена", True)
    assert handle_command(client, "end")[0].startswith("Укажите идентификатор")
    assert handle_command(client, "frobnicate")[0].startswith("Неизвестная команда")
    assert handle_command(client, "   ") == ("", True)
    assert handle_command(client, "quit") == ("", False)


@pytest.mark.asyncio
async def test_run_console_session() -> None:
    sync = FakeSync([Task(id=1, text="Existing", is_timed=True, time_spent=2, is_running=True)])
    client = TaskListClient(TaskBoard(), sync, tick_seconds=3600)
    lines: asyncio.Queue = asyncio.Queue()
    for line in ("list\n", "add Groceries\n", "toggle 1\n", "quit\n", "add never reached\n"):
        lines.put_nowait(line)
    written: list[str] = []

    await run_console(client, lines=lines, write=written.append)

    assert "1: Existing - 2 min [Resume] [End] [Delete]" in written
    assert [task.text for task in client.board.tasks] == ["Existing", "Groceries"]
    assert len(client.timers) == 0
    assert sync.drained == 1


@pytest.mark.asyncio
async def test_run_console_stops_at_end_of_input() -> None:
    sync = FakeSync()
    client = TaskListClient(TaskBoard(), sync)
    lines: asyncio.Queue = asyncio.Queue()
    lines.put_nowait("add one\n")
    lines.put_nowait(None)

    await run_console(client, lines=lines, write=lambda _: None)

    assert [task.text for task in client.board.tasks] == ["one"]
    assert sync.drained == 1
