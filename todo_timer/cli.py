"""CLI-интерфейс: сервер хранилища и консольный клиент."""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Iterable

import typer

from todo_timer.clients import TaskStoreAPIError, TaskStoreClient
from todo_timer.config import AppConfig
from todo_timer.console import run_console
from todo_timer.models import Task, TaskBoard
from todo_timer.server import run_server
from todo_timer.services.sync import TaskSyncService
from todo_timer.services.task_list import TaskListClient
from todo_timer.services.task_mapper import TaskMapper

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

app = typer.Typer(help="Список задач с таймерами и JSON-хранилищем")


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=LOG_FORMAT)


def format_task_table(tasks: Iterable[Task]) -> str:
    rows = [
        (
            str(task.id),
            str(task.text),
            str(task.time_spent),
            ("running" if task.is_running else "paused") if task.is_timed else "-",
        )
        for task in tasks
    ]
    if not rows:
        return "Задач нет"
    headers = ("ID", "Text", "Minutes", "Timer")
    widths = [max(len(header), *(len(row[i]) for row in rows)) for i, header in enumerate(headers)]

    def line(cells) -> str:
        return "  " + "  |  ".join(cell.ljust(width) for cell, width in zip(cells, widths))

    rule = "  " + "--+--".join("-" * width for width in widths)
    body = "\n".join(line(row) for row in rows)
    return f"{line(headers)}\n{rule}\n{body}"


def build_client(config: AppConfig) -> tuple[TaskListClient, TaskSyncService]:
    store_client = TaskStoreClient(config.client)
    sync = TaskSyncService(store_client)
    client = TaskListClient(TaskBoard(), sync, tick_seconds=config.client.tick_seconds)
    return client, sync


@app.command("serve")
def serve(
    config_path: Path = typer.Option(Path("config.yaml"), "--config", "-c", help="Путь к YAML конфигурации"),
    verbosity: int = typer.Option(0, "--verbose", "-v", count=True, help="Уровень логирования"),
) -> None:
    """Запускает HTTP-хранилище задач."""
    configure_logging(verbosity)
    config = AppConfig.load(config_path)
    config.ensure_runtime_dirs()
    typer.echo(f"Server running at http://{config.server.host}:{config.server.port}")
    run_server(config.server)


@app.command("console")
def console(
    config_path: Path = typer.Option(Path("config.yaml"), "--config", "-c"),
    verbosity: int = typer.Option(0, "--verbose", "-v", count=True),
) -> None:
    """Интерактивный список задач в терминале."""
    configure_logging(verbosity)
    config = AppConfig.load(config_path)
    client, sync = build_client(config)
    try:
        asyncio.run(run_console(client))
    except KeyboardInterrupt:
        typer.echo()
    finally:
        sync.close()


@app.command("list")
def list_tasks(
    config_path: Path = typer.Option(Path("config.yaml"), "--config", "-c"),
    verbosity: int = typer.Option(0, "--verbose", "-v", count=True),
) -> None:
    """Выводит сохранённые задачи."""
    configure_logging(verbosity)
    config = AppConfig.load(config_path)
    store_client = TaskStoreClient(config.client)
    try:
        payload = store_client.fetch_tasks()
    except TaskStoreAPIError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)
    finally:
        store_client.close()
    records = TaskMapper().map_records(payload if isinstance(payload, list) else [])
    tasks = [record for record in records if isinstance(record, Task)]
    typer.echo(format_task_table(tasks))


@app.command("verify")
def verify(
    config_path: Path = typer.Option(Path("config.yaml"), "--config", "-c"),
    verbosity: int = typer.Option(0, "--verbose", "-v", count=True),
) -> None:
    """Проверяет доступность хранилища задач."""
    configure_logging(verbosity)
    config = AppConfig.load(config_path)
    store_client = TaskStoreClient(config.client)
    try:
        store_client.fetch_tasks()
    except TaskStoreAPIError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)
    finally:
        store_client.close()
    typer.echo("Соединение успешно")


if __name__ == "__main__":
    app()
