"""HTTP-хранилище задач на Flask."""
from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from todo_timer.config import ServerOptions
from todo_timer.services.file_store import TaskFileStore

LOGGER = logging.getLogger(__name__)


def create_app(options: Optional[ServerOptions] = None, store: Optional[TaskFileStore] = None) -> Flask:
    """Собирает Flask-приложение с маршрутами ``/tasks``."""
    options = options or ServerOptions()
    store = store or TaskFileStore(options.data_file)

    app = Flask(__name__)
    app.config["TASK_STORE"] = store
    CORS(app)

    @app.route("/tasks", methods=["GET"])
    def get_tasks():
        return jsonify(store.read_all())

    @app.route("/tasks", methods=["POST", "PUT"])
    def save_tasks():
        payload = request.get_json(force=True)
        try:
            store.replace_all(payload)
        except OSError:
            LOGGER.exception("Не удалось сохранить задачи в %s", store.path)
            return "Failed to save", 500
        LOGGER.info("Сохранено записей: %s", len(payload) if isinstance(payload, list) else "?")
        return "Saved", 200

    return app


def run_server(options: ServerOptions) -> None:
    """Запускает сервер разработки Flask."""
    app = create_app(options)
    LOGGER.info("Хранилище задач: %s", options.data_file)
    app.run(host=options.host, port=options.port, use_reloader=False)


__all__ = ["create_app", "run_server"]
