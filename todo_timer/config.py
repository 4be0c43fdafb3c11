"""Загрузка и валидация конфигурации приложения."""
from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator


class ServerOptions(BaseModel):
    """Настройки HTTP-хранилища задач."""

    host: str = Field("127.0.0.1", description="Адрес, на котором слушает сервер")
    port: int = Field(4000, description="Порт сервера")
    data_file: Path = Field(Path("tasks.json"), description="JSON-файл со списком задач")

    @field_validator("data_file", mode="before")
    @classmethod
    def _data_file_path(cls, value: Path | str) -> Path:
        return Path(value)


class ClientOptions(BaseModel):
    """Настройки клиента списка задач."""

    base_url: str = Field("http://localhost:4000", description="Базовый URL хранилища задач")
    tick_seconds: float = Field(60.0, gt=0, description="Период тика таймера задачи, в секундах")
    timeout: float = Field(30.0, gt=0, description="Таймаут HTTP-запросов, в секундах")


class AppConfig(BaseModel):
    """Корневая конфигурация приложения."""

    server: ServerOptions = Field(default_factory=ServerOptions)
    client: ClientOptions = Field(default_factory=ClientOptions)

    @classmethod
    def load(cls, path: Path | str) -> "AppConfig":
        """Загружает конфигурацию из YAML-файла; без файла берутся значения по умолчанию."""
        path = Path(path)
        if not path.exists():
            return cls()
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        try:
            return cls.model_validate(raw)
        except ValidationError as exc:
            raise ValueError(f"Конфигурация {path} некорректна: {exc}") from exc

    def ensure_runtime_dirs(self) -> None:
        """Создаёт каталог для файла с задачами."""
        self.server.data_file.parent.mkdir(parents=True, exist_ok=True)


__all__ = ["AppConfig", "ClientOptions", "ServerOptions"]
