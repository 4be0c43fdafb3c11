"""Консольный интерфейс списка задач."""
from __future__ import annotations

import asyncio
import contextlib
import logging
import sys
import threading
from typing import Callable, Optional, Tuple

from todo_timer.models import Task, TaskBoard, TaskId, TaskNotFoundError
from todo_timer.services.task_list import TaskListClient

LOGGER = logging.getLogger(__name__)

PROMPT = "> "
HELP_TEXT = """Команды:
  add <текст>      добавить задачу без таймера
  timed <текст>    добавить задачу с таймером
  toggle <id>      запустить или поставить на паузу таймер
  end <id>         остановить таймер
  delete <id>      удалить задачу
  list             показать задачи
  help             эта справка
  quit             выход"""


def render_task(task: Task) -> str:
    line = f"{task.id}: {task.text} - {task.time_spent} min"
    if task.is_timed:
        line += f" [{'Pause' if task.is_running else 'Resume'}] [End]"
    return f"{line} [Delete]"


def render_board(board: TaskBoard) -> str:
    if not board.tasks:
        return "Задач нет"
    return "\n".join(render_task(task) for task in board.tasks)


def parse_task_id(raw: str) -> TaskId:
    raw = raw.strip()
    try:
        return int(raw)
    except ValueError:
        return raw


def resolve_task_id(board: TaskBoard, raw: str) -> TaskId:
    """Числовой идентификатор, а если такой задачи нет, то строковый с тем же текстом."""
    task_id = parse_task_id(raw)
    raw = raw.strip()
    if task_id != raw and task_id not in board.ids() and raw in board.ids():
        return raw
    return task_id


def handle_command(client: TaskListClient, line: str) -> Tuple[str, bool]:
    """Выполняет одну команду. Возвращает текст ответа и признак продолжения работы."""
    parts = line.strip().split(maxsplit=1)
    if not parts:
        return "", True
    command = parts[0].lower()
    argument = parts[1] if len(parts) > 1 else ""

    if command in ("quit", "exit"):
        return "", False
    if command == "help":
        return HELP_TEXT, True
    if command == "list":
        return render_board(client.board), True
    if command in ("add", "timed"):
        client.set_draft(argument)
        client.add(is_timed=command == "timed")
        return render_board(client.board), True

    operations = {
        "toggle": client.toggle_timer,
        "end": client.end,
        "delete": client.delete,
    }
    operation = operations.get(command)
    if operation is None:
        return f"Неизвестная команда: {command}. Введите help", True
    if not argument:
        return f"Укажите идентификатор задачи: {command} <id>", True
    try:
        operation(resolve_task_id(client.board, argument))
    except TaskNotFoundError:
        return f"Задача {argument.strip()} не найдена", True
    return render_board(client.board), True


def _start_stdin_reader(queue: "asyncio.Queue[Optional[str]]") -> threading.Thread:
    loop = asyncio.get_running_loop()

    def deliver(line: Optional[str]) -> None:
        with contextlib.suppress(RuntimeError):  # цикл уже закрыт
            loop.call_soon_threadsafe(queue.put_nowait, line)

    def reader() -> None:
        for line in sys.stdin:
            deliver(line)
        deliver(None)

    thread = threading.Thread(target=reader, name="console-input", daemon=True)
    thread.start()
    return thread


async def run_console(
    client: TaskListClient,
    lines: "Optional[asyncio.Queue[Optional[str]]]" = None,
    write: Callable[[str], None] = print,
) -> None:
    """Основной цикл консоли. ``None`` в очереди строк означает конец ввода."""
    await client.load()
    write("To-Do Timer. Введите help для списка команд.")
    write(render_board(client.board))

    if lines is None:
        lines = asyncio.Queue()
        _start_stdin_reader(lines)
        interactive = True
    else:
        interactive = False

    try:
        while True:
            if interactive:
                sys.stdout.write(PROMPT)
                sys.stdout.flush()
            raw = await lines.get()
            if raw is None:
                LOGGER.info("Конец ввода, выход")
                break
            output, keep_running = handle_command(client, raw)
            if output:
                write(output)
            if not keep_running:
                LOGGER.info("Получена команда выхода")
                break
    finally:
        await client.close()


__all__ = ["handle_command", "parse_task_id", "resolve_task_id", "render_board", "render_task", "run_console"]
