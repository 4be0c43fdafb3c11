# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from todo_timer.config import ServerOptions
from todo_timer.models import TaskBoard
from todo_timer.server import create_app
from todo_timer.services.file_store import TaskFileStore
from todo_timer.services.task_list import TaskListClient

from .fakes import FakeSync


@pytest.fixture()
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "tasks.json"


@pytest.fixture()
def store(data_file: Path) -> TaskFileStore:
    return TaskFileStore(data_file)


@pytest.fixture()
def http(data_file: Path, store: TaskFileStore):
    """Flask test client over a tmp JSON file."""
    app = create_app(ServerOptions(data_file=data_file), store=store)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture()
def sync() -> FakeSync:
    return FakeSync()


@pytest.fixture()
def client(sync: FakeSync) -> TaskListClient:
    # tick_seconds is large: timer ticks in most tests are driven by calling tick() directly
    return TaskListClient(TaskBoard(), sync, tick_seconds=3600)
