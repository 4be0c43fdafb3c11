"""Сервисный слой приложения."""

from .file_store import TaskFileStore
from .sync import TaskSyncService
from .task_list import TaskListClient, TimerRegistry
from .task_mapper import TaskMapper

__all__ = ["TaskFileStore", "TaskListClient", "TaskMapper", "TaskSyncService", "TimerRegistry"]
