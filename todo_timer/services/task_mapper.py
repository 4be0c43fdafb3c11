"""Маппинг задач между JSON-представлением хранилища и доменной моделью."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List

from todo_timer.models import OpaqueRecord, Record, Task

# Значения, которые получает задача, если поля нет в записи.
WIRE_DEFAULTS: Dict[str, Any] = {
    "id": None,
    "text": "",
    "isTimed": False,
    "timeSpent": 0,
    "isRunning": False,
}
WIRE_FIELDS = tuple(WIRE_DEFAULTS)
# Ссылка на таймер из старых версий клиента: в новых записях не хранится.
EPHEMERAL_FIELDS = ("timerId",)


class TaskMapper:
    """Конвертация данных между API и внутренними моделями.

    Формы записей не проверяются. Неизвестные поля сохраняются в ``Task.extra``,
    отсутствующие поля не появляются при обратной отправке, пока клиент их
    не изменил, а элементы, не являющиеся объектами, уходят на сервер как есть.
    """

    def map_task(self, payload: Dict[str, Any]) -> Task:
        extra = {
            key: value
            for key, value in payload.items()
            if key not in WIRE_FIELDS and key not in EPHEMERAL_FIELDS
        }
        return Task(
            id=payload.get("id", WIRE_DEFAULTS["id"]),
            text=payload.get("text", WIRE_DEFAULTS["text"]),
            is_timed=payload.get("isTimed", WIRE_DEFAULTS["isTimed"]),
            time_spent=payload.get("timeSpent", WIRE_DEFAULTS["timeSpent"]),
            is_running=payload.get("isRunning", WIRE_DEFAULTS["isRunning"]),
            extra=extra,
            absent=frozenset(key for key in WIRE_FIELDS if key not in payload),
        )

    def map_record(self, payload: Any) -> Record:
        if isinstance(payload, dict):
            return self.map_task(payload)
        return OpaqueRecord(payload)

    def map_records(self, payload: Iterable[Any]) -> List[Record]:
        return [self.map_record(item) for item in payload]

    def to_payload(self, record: Record) -> Any:
        if isinstance(record, OpaqueRecord):
            return record.value
        values = {
            "id": record.id,
            "text": record.text,
            "isTimed": record.is_timed,
            "timeSpent": record.time_spent,
            "isRunning": record.is_running,
        }
        payload: Dict[str, Any] = {
            key: value
            for key, value in values.items()
            if key not in record.absent or value != WIRE_DEFAULTS[key]
        }
        for key, value in record.extra.items():
            payload.setdefault(key, value)
        return payload

    def to_payloads(self, records: Iterable[Record]) -> List[Any]:
        return [self.to_payload(record) for record in records]


__all__ = ["TaskMapper", "WIRE_DEFAULTS", "WIRE_FIELDS"]
