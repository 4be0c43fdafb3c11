# tests/test_task_store_client.py

from __future__ import annotations

import pytest

from todo_timer.clients import TaskStoreAPIError, TaskStoreClient
from todo_timer.config import ClientOptions

from .fakes import FakeResponse, FakeSession, connection_error


def make_client(*responses) -> tuple[TaskStoreClient, FakeSession]:
    session = FakeSession(*responses)
    options = ClientOptions(base_url="http://store.local:4000/", timeout=5)
    return TaskStoreClient(options, session=session), session


def test_fetch_tasks() -> None:
    client, session = make_client(FakeResponse(payload=[{"id": 1, "text": "a"}]))

    assert client.fetch_tasks() == [{"id": 1, "text": "a"}]
    assert session.calls == [{"method": "GET", "url": "http://store.local:4000/tasks", "timeout": 5.0}]
    assert session.headers["Accept"] == "application/json"


def test_save_tasks_posts_full_list() -> None:
    client, session = make_client(FakeResponse(text="Saved"))
    payload = [{"id": 1, "text": "a"}, {"id": 2, "text": "b"}]

    client.save_tasks(payload)

    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "http://store.local:4000/tasks"
    assert call["json"] == payload


def test_http_error_raises() -> None:
    client, _ = make_client(FakeResponse(status_code=500, text="Failed to save"))

    with pytest.raises(TaskStoreAPIError, match="500"):
        client.save_tasks([])


def test_transport_error_raises() -> None:
    client, _ = make_client(connection_error())

    with pytest.raises(TaskStoreAPIError):
        client.fetch_tasks()


def test_non_json_response_raises() -> None:
    client, _ = make_client(FakeResponse(text="<html>"))

    with pytest.raises(TaskStoreAPIError):
        client.fetch_tasks()


def test_close_closes_session() -> None:
    client, session = make_client()

    client.close()

    assert session.closed is True
