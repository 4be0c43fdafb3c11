"""Файловое хранилище списка задач."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List

LOGGER = logging.getLogger(__name__)


class TaskFileStore:
    """Обёртка над JSON-файлом, в котором лежит последний присланный список задач.

    Хранилище ничего не проверяет и не изменяет: чтение отдаёт содержимое файла,
    запись целиком перезаписывает его.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read_all(self) -> List[Any]:
        """Возвращает сохранённый список, а при любой ошибке чтения возвращает пустой список."""
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            LOGGER.debug("Файл %s не прочитан (%s), задач нет", self._path, exc)
            return []
        try:
            data = json.loads(raw)
        except ValueError as exc:
            LOGGER.debug("Файл %s повреждён (%s), задач нет", self._path, exc)
            return []
        if not isinstance(data, list):
            LOGGER.debug("Файл %s содержит %s вместо списка, задач нет", self._path, type(data).__name__)
            return []
        return data

    def replace_all(self, payload: Any) -> None:
        """Перезаписывает файл присланным содержимым. Ошибки ввода-вывода пробрасываются."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        LOGGER.debug("Файл %s перезаписан", self._path)


__all__ = ["TaskFileStore"]
