"""Доменные модели списка задач."""

from .entities import OpaqueRecord, Record, Task, TaskBoard, TaskId, TaskNotFoundError

__all__ = [
    "OpaqueRecord",
    "Record",
    "Task",
    "TaskBoard",
    "TaskId",
    "TaskNotFoundError",
]
