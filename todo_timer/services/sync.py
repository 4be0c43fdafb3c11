"""Синхронизация списка задач с хранилищем."""
from __future__ import annotations

import asyncio
import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Iterable, List, Optional, Set

from todo_timer.clients import TaskStoreClient
from todo_timer.models import Record
from todo_timer.services.task_mapper import TaskMapper

LOGGER = logging.getLogger(__name__)


class TaskSyncService:
    """Загрузка и отправка полного списка задач.

    HTTP-запросы выполняются в отдельном потоке и не блокируют цикл событий.
    Поток один, поэтому снимки доходят до сервера в порядке изменений.
    Отправка работает по принципу «отправил и забыл»: ошибка только
    логируется, повторов нет.
    """

    def __init__(
        self,
        store_client: TaskStoreClient,
        task_mapper: Optional[TaskMapper] = None,
        executor: Optional[Executor] = None,
    ) -> None:
        self._client = store_client
        self._mapper = task_mapper or TaskMapper()
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="task-sync")
        self._pending: Set[asyncio.Future] = set()

    # region public API
    async def fetch(self) -> List[Record]:
        loop = asyncio.get_running_loop()
        payload = await loop.run_in_executor(self._executor, self._client.fetch_tasks)
        if not isinstance(payload, list):
            LOGGER.warning("Хранилище вернуло %s вместо списка задач", type(payload).__name__)
            return []
        return self._mapper.map_records(payload)

    def push(self, records: Iterable[Record]) -> asyncio.Future:
        """Отправляет снимок списка; снимок снимается в момент вызова."""
        payload = self._mapper.to_payloads(records)
        loop = asyncio.get_running_loop()
        future = loop.run_in_executor(self._executor, self._client.save_tasks, payload)
        self._pending.add(future)
        future.add_done_callback(self._on_pushed)
        return future

    async def drain(self) -> None:
        """Дожидается завершения всех отправок."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def close(self) -> None:
        self._executor.shutdown(wait=True)
        self._client.close()

    # endregion

    def _on_pushed(self, future: asyncio.Future) -> None:
        self._pending.discard(future)
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            LOGGER.warning("Не удалось сохранить задачи: %s", exc)
        else:
            LOGGER.debug("Список задач сохранён")


__all__ = ["TaskSyncService"]
