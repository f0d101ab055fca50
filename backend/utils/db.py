import logging
import time

from bson import ObjectId
from bson.errors import InvalidId
from flask import current_app
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from backend.errors import NotFound
from backend.models.task_model import Task

logger = logging.getLogger(__name__)

EXTENSION_KEY = "task_store"


def init_app(app, store):
    """Attach ``store`` to the app so request handlers can reach it via ``get_store``."""
    app.extensions[EXTENSION_KEY] = store


def get_store():
    return current_app.extensions[EXTENSION_KEY]


def create_client(config):
    # MongoClient connects lazily; nothing here touches the network.
    return MongoClient(
        config["MONGO_URI"],
        serverSelectionTimeoutMS=int(config["MONGO_SERVER_SELECTION_TIMEOUT_MS"]),
        tz_aware=True,
    )


def connect_with_retry(client, attempts=5, delay=1.0, max_delay=16.0, sleep=None):
    """Ping the server until it answers or ``attempts`` run out.

    The wait doubles after every failure, capped at ``max_delay``. Returns
    whether a ping succeeded; callers keep running either way.
    """
    sleep = sleep or time.sleep
    attempts = max(1, int(attempts))
    wait = float(delay)
    for attempt in range(1, attempts + 1):
        try:
            client.admin.command("ping")
        except PyMongoError as exc:
            logger.warning("MongoDB ping failed (attempt %d/%d): %s", attempt, attempts, exc)
            if attempt == attempts:
                break
            sleep(wait)
            wait = min(wait * 2, float(max_delay))
        else:
            logger.info("MongoDB connected after %d attempt(s)", attempt)
            return True
    logger.error("MongoDB unreachable after %d attempts; starting without a database", attempts)
    return False


def to_object_id(value):
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise NotFound() from None


def serialize_doc(doc):
    return Task(
        id=str(doc["_id"]),
        title=doc["title"],
        description=doc.get("description") or "",
        completed=bool(doc.get("completed", False)),
        created_at=doc["createdAt"],
    )


def task_to_doc(task):
    return {
        "_id": ObjectId(task.id),
        "title": task.title,
        "description": task.description,
        "completed": task.completed,
        "createdAt": task.created_at,
    }
