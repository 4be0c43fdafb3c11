"""Список задач с таймерами и HTTP-хранилищем в JSON-файле."""

__version__ = "0.1.0"
