"""Клиент списка задач: операции пользователя и таймеры."""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Dict, Optional

from todo_timer.clients import TaskStoreAPIError
from todo_timer.models import Task, TaskBoard, TaskId, TaskNotFoundError
from todo_timer.services.sync import TaskSyncService

LOGGER = logging.getLogger(__name__)

DEFAULT_TICK_SECONDS = 60.0


def _minutes(task: Task) -> int:
    """Текущее значение счётчика; записи из хранилища могут нести в нём что угодно."""
    value = task.time_spent
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    LOGGER.warning("У задачи %s счётчик %r не является числом, отсчёт начат с нуля", task.id, value)
    return 0


class TimerRegistry:
    """Соответствие «идентификатор задачи → периодический таймер».

    Каждый таймер является отдельной asyncio-задачей, которая раз в ``interval`` секунд
    вызывает ``on_tick``. Остановка таймера отменяет эту задачу. Если ``on_tick``
    падает, таймер останавливается и вызывается ``on_failure``.
    """

    def __init__(
        self,
        interval: float,
        on_tick: Callable[[TaskId], object],
        on_failure: Optional[Callable[[TaskId], object]] = None,
    ) -> None:
        self._interval = interval
        self._on_tick = on_tick
        self._on_failure = on_failure
        self._timers: Dict[TaskId, asyncio.Task] = {}

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._timers

    def __len__(self) -> int:
        return len(self._timers)

    def start(self, task_id: TaskId) -> None:
        self.cancel(task_id)
        loop = asyncio.get_running_loop()
        self._timers[task_id] = loop.create_task(self._run(task_id), name=f"timer-{task_id}")

    def cancel(self, task_id: TaskId) -> bool:
        timer = self._timers.pop(task_id, None)
        if timer is None:
            return False
        timer.cancel()
        return True

    def cancel_all(self) -> None:
        for task_id in list(self._timers):
            self.cancel(task_id)

    async def _run(self, task_id: TaskId) -> None:
        current = asyncio.current_task()
        try:
            while True:
                await asyncio.sleep(self._interval)
                try:
                    self._on_tick(task_id)
                except TaskNotFoundError:
                    LOGGER.debug("Задача %s исчезла, таймер остановлен", task_id)
                    return
                except Exception:
                    LOGGER.exception("Ошибка тика задачи %s, таймер остановлен", task_id)
                    self._stop_failed(task_id)
                    return
        finally:
            if self._timers.get(task_id) is current:
                del self._timers[task_id]

    def _stop_failed(self, task_id: TaskId) -> None:
        self._timers.pop(task_id, None)
        if self._on_failure is None:
            return
        try:
            self._on_failure(task_id)
        except Exception:
            LOGGER.exception("Не удалось остановить задачу %s после ошибки таймера", task_id)


class TaskListClient:
    """Владелец рабочей копии списка задач.

    Каждая изменяющая операция отправляет в хранилище полный список.
    Локальный список остаётся источником истины независимо от исхода отправки.
    Все операции должны вызываться из работающего цикла событий.
    """

    def __init__(
        self,
        board: TaskBoard,
        sync: TaskSyncService,
        *,
        tick_seconds: float = DEFAULT_TICK_SECONDS,
    ) -> None:
        self._board = board
        self._sync = sync
        self._timers = TimerRegistry(tick_seconds, self.tick, on_failure=self.end)
        self._last_id = 0

    @property
    def board(self) -> TaskBoard:
        return self._board

    @property
    def timers(self) -> TimerRegistry:
        return self._timers

    # region lifecycle
    async def load(self) -> TaskBoard:
        """Загружает список из хранилища; при ошибке начинает с пустого."""
        self._timers.cancel_all()
        try:
            records = await self._sync.fetch()
        except TaskStoreAPIError as exc:
            LOGGER.warning("Не удалось загрузить задачи: %s", exc)
            records = []
        self._board.records = records
        for task in self._board.tasks:
            # таймеры не переживают перезапуск клиента
            if task.is_running:
                LOGGER.info("Задача %s была запущена в прошлой сессии, таймер остановлен", task.id)
                task.is_running = False
        LOGGER.info("Загружено записей: %s", len(records))
        return self._board

    async def close(self) -> None:
        self._timers.cancel_all()
        await self._sync.drain()

    # endregion

    # region operations
    def set_draft(self, text: str) -> None:
        self._board.draft = text

    def add(self, text: Optional[str] = None, is_timed: bool = False) -> Task:
        """Добавляет задачу; без ``text`` берётся черновик, который затем очищается."""
        task = Task(
            id=self._next_id(),
            text=self._board.draft if text is None else text,
            is_timed=is_timed,
        )
        self._board.append(task)
        self._board.draft = ""
        LOGGER.debug("Добавлена задача %s (таймер: %s)", task.id, is_timed)
        self._push()
        return task

    def toggle_timer(self, task_id: TaskId) -> Task:
        task = self._board.find(task_id)
        if not task.is_timed:
            LOGGER.info("У задачи %s нет таймера, переключение пропущено", task_id)
            return task
        if task.is_running:
            self._timers.cancel(task_id)
            task.is_running = False
        else:
            self._timers.start(task_id)
            task.is_running = True
        LOGGER.debug("Таймер задачи %s: %s", task_id, "запущен" if task.is_running else "на паузе")
        self._push()
        return task

    def tick(self, task_id: TaskId) -> Task:
        task = self._board.find(task_id)
        if task.is_running:
            task.time_spent = _minutes(task) + 1
        self._push()
        return task

    def end(self, task_id: TaskId) -> Task:
        task = self._board.find(task_id)
        self._timers.cancel(task_id)
        task.is_running = False
        self._push()
        return task

    def delete(self, task_id: TaskId) -> Task:
        task = self._board.remove(task_id)
        self._timers.cancel(task_id)
        LOGGER.debug("Удалена задача %s", task_id)
        self._push()
        return task

    # endregion

    def _push(self) -> None:
        self._sync.push(self._board.records)

    def _next_id(self) -> int:
        known = [
            task.id
            for task in self._board.tasks
            if isinstance(task.id, int) and not isinstance(task.id, bool)
        ]
        floor = max([self._last_id, *known])
        self._last_id = max(int(time.time() * 1000), floor + 1)
        return self._last_id


__all__ = ["TaskListClient", "TimerRegistry", "DEFAULT_TICK_SECONDS"]
