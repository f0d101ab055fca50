import logging
import os

import click
from flask import Flask, jsonify, send_from_directory
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from backend.errors import StoreUnavailable
from backend.models.task_model import sample_tasks
from backend.stores.memory_store import MemoryTaskStore
from backend.stores.mongo_store import MongoTaskStore
from backend.utils.db import connect_with_retry, create_client, get_store, init_app as init_store


def _configure_logging(app):
    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.logger.setLevel(app.config["LOG_LEVEL"])


def build_store(app):
    """Create the task store selected by ``TASK_STORE``."""
    backend = app.config["TASK_STORE"]
    if backend == "memory":
        store = MemoryTaskStore()
        if app.config["SEED_SAMPLE_TASKS"]:
            for task in sample_tasks(store.new_id):
                store.insert(task)
        return store

    if backend == "mongo":
        client = create_client(app.config)
        store = MongoTaskStore(client, app.config["MONGO_DB_NAME"])
        connected = connect_with_retry(
            client,
            attempts=app.config["MONGO_CONNECT_RETRIES"],
            delay=app.config["MONGO_RETRY_DELAY"],
            max_delay=app.config["MONGO_RETRY_MAX_DELAY"],
        )
        if connected:
            try:
                store.ensure_indexes()
            except StoreUnavailable:
                app.logger.warning("Could not create MongoDB indexes; continuing without them")
        return store

    raise ValueError(f"Unknown TASK_STORE {backend!r}; expected 'memory' or 'mongo'")


def create_app(config=None, store=None):
    # Point Flask to the frontend folder for the browser client
    frontend_dir = os.path.join(os.path.dirname(os.path.dirname(__file__)), "frontend")
    app = Flask(__name__, static_folder=frontend_dir, static_url_path="")
    app.config.from_object("backend.config.Config")
    if config:
        app.config.from_mapping(config)
    app.json.sort_keys = False

    _configure_logging(app)

    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})

    if store is None:
        store = build_store(app)
    init_store(app, store)
    app.logger.info("Task store backend: %s", store.name)

    from backend.routes.health_routes import health_bp
    from backend.routes.task_routes import tasks_bp

    app.register_blueprint(tasks_bp, url_prefix="/api/tasks")
    app.register_blueprint(health_bp)

    @app.get("/")
    def index():
        return send_from_directory(app.static_folder, "index.html")

    @app.errorhandler(HTTPException)
    def http_error(exc):
        return jsonify(message=exc.description), exc.code

    @app.errorhandler(StoreUnavailable)
    def store_unavailable(exc):
        app.logger.error("Task store unavailable: %s", exc.__cause__ or exc)
        return jsonify(message="Task storage is unavailable. Please try again."), 500

    @app.errorhandler(Exception)
    def server_error(exc):
        app.logger.exception("Unhandled error: %s", exc)
        return jsonify(message="Internal Server Error"), 500

    @app.cli.command("init-db")
    @click.option("--samples/--no-samples", default=True, help="Insert the demo tasks after clearing.")
    def init_db_command(samples):
        """Drop all tasks, create indexes and optionally insert the demo tasks."""
        task_store = get_store()
        task_store.clear()
        if isinstance(task_store, MongoTaskStore):
            task_store.ensure_indexes()
        inserted = 0
        if samples:
            for task in sample_tasks(task_store.new_id):
                task_store.insert(task)
                inserted += 1
        click.echo(f"Initialized {task_store.name} task store with {inserted} sample task(s).")

    return app


if __name__ == "__main__":
    # Direct run support: python -m backend.app
    app = create_app()
    app.run(
        host=app.config["HOST"],
        port=app.config["PORT"],
        debug=app.config["DEBUG"],
    )
