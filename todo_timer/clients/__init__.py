"""HTTP-клиенты приложения."""

from .task_store import TaskStoreAPIError, TaskStoreClient

__all__ = ["TaskStoreClient", "TaskStoreAPIError"]
