"""HTTP-клиент для хранилища задач."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

from todo_timer.config import ClientOptions


class TaskStoreAPIError(RuntimeError):
    """Ошибка обращения к хранилищу задач."""


class TaskStoreClient:
    """Минимальный клиент API хранилища задач."""

    def __init__(self, config: ClientOptions, session: Optional[requests.Session] = None) -> None:
        self._config = config
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "User-Agent": "todo-timer/0.1",
                "Accept": "application/json",
            }
        )

    @property
    def base_url(self) -> str:
        return self._config.base_url.rstrip("/")

    def _request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        try:
            response = self._session.request(method, url, timeout=self._config.timeout, **kwargs)
        except requests.RequestException as exc:
            raise TaskStoreAPIError(f"Хранилище недоступно при запросе {method} {url}: {exc}") from exc
        if response.status_code >= 400:
            raise TaskStoreAPIError(
                f"Ошибка хранилища {response.status_code} при запросе {method} {url}: {response.text}"
            )
        return response

    def fetch_tasks(self) -> List[Dict[str, Any]]:
        """Возвращает весь сохранённый список задач."""
        response = self._request("GET", "/tasks")
        try:
            return response.json()
        except ValueError as exc:
            raise TaskStoreAPIError(f"Хранилище вернуло не JSON: {response.text[:200]}") from exc

    def save_tasks(self, payload: List[Dict[str, Any]]) -> None:
        """Целиком заменяет сохранённый список задач."""
        self._request("POST", "/tasks", json=payload)

    def close(self) -> None:
        self._session.close()


__all__ = ["TaskStoreClient", "TaskStoreAPIError"]
