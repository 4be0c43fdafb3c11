"""Определения доменных сущностей."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Union

TaskId = Union[int, str]


class TaskNotFoundError(KeyError):
    """Задача с указанным идентификатором отсутствует в списке."""


@dataclass(slots=True)
class Task:
    """Задача списка дел.

    Ссылка на активный таймер в задаче не хранится: таймеры живут в
    ``TimerRegistry`` клиента и никогда не попадают в сериализованную запись.
    ``absent`` перечисляет поля JSON, которых не было в загруженной записи.
    """

    id: TaskId
    text: str
    is_timed: bool = False
    time_spent: int = 0
    is_running: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)
    absent: FrozenSet[str] = frozenset()


@dataclass(slots=True)
class OpaqueRecord:
    """Элемент сохранённого списка, не являющийся объектом; отправляется обратно как есть."""

    value: Any


Record = Union[Task, OpaqueRecord]


@dataclass(slots=True)
class TaskBoard:
    """Рабочая копия списка задач на время сессии; пишет в неё только клиент."""

    records: List[Record] = field(default_factory=list)
    draft: str = ""

    @property
    def tasks(self) -> List[Task]:
        return [record for record in self.records if isinstance(record, Task)]

    def append(self, task: Task) -> None:
        self.records.append(task)

    def find(self, task_id: TaskId) -> Task:
        for task in self.tasks:
            if task.id == task_id:
                return task
        raise TaskNotFoundError(task_id)

    def remove(self, task_id: TaskId) -> Task:
        task = self.find(task_id)
        self.records = [record for record in self.records if record is not task]
        return task

    def ids(self) -> List[TaskId]:
        return [task.id for task in self.tasks]


__all__ = ["OpaqueRecord", "Record", "Task", "TaskBoard", "TaskId", "TaskNotFoundError"]
