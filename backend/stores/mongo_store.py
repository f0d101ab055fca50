import logging
from contextlib import contextmanager
from typing import Any, List, Mapping, Optional

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from backend.errors import NotFound, StoreUnavailable
from backend.models.task_model import (
    Task,
    normalize_changes,
    utcnow,
    validate_completed,
    validate_description,
    validate_title,
)
from backend.stores.base import TaskStore
from backend.utils.db import serialize_doc, task_to_doc, to_object_id

logger = logging.getLogger(__name__)

SORT_NEWEST_FIRST = [("createdAt", DESCENDING), ("_id", DESCENDING)]


@contextmanager
def _translate_errors(action):
    try:
        yield
    except PyMongoError as exc:
        logger.error("MongoDB error while trying to %s: %s", action, exc)
        raise StoreUnavailable() from exc


class MongoTaskStore(TaskStore):
    """Task store backed by a MongoDB ``tasks`` collection.

    Every mutation is a single-document operation, which MongoDB applies
    atomically.
    """

    name = "mongo"

    def __init__(self, client, db_name, collection_name="tasks"):
        self.client = client
        self.collection = client[db_name][collection_name]

    def new_id(self) -> str:
        return str(ObjectId())

    def ping(self) -> bool:
        try:
            self.client.admin.command("ping")
        except PyMongoError as exc:
            logger.debug("MongoDB ping failed: %s", exc)
            return False
        return True

    def ensure_indexes(self) -> None:
        with _translate_errors("create indexes"):
            self.collection.create_index([("title", ASCENDING)])
            self.collection.create_index([("completed", ASCENDING)])
            self.collection.create_index([("createdAt", DESCENDING)])

    def list(self) -> List[Task]:
        with _translate_errors("list tasks"):
            docs = list(self.collection.find().sort(SORT_NEWEST_FIRST))
        return [serialize_doc(doc) for doc in docs]

    def create(self, title: Any, description: Optional[Any] = None, completed: Any = False) -> Task:
        task = Task(
            id=self.new_id(),
            title=validate_title(title),
            description=validate_description(description),
            completed=validate_completed(completed),
            created_at=utcnow(),
        )
        return self.insert(task)

    def insert(self, task: Task) -> Task:
        with _translate_errors("insert a task"):
            self.collection.insert_one(task_to_doc(task))
        return task

    def get(self, task_id: str) -> Task:
        oid = to_object_id(task_id)
        with _translate_errors("fetch a task"):
            doc = self.collection.find_one({"_id": oid})
        if doc is None:
            raise NotFound()
        return serialize_doc(doc)

    def update(self, task_id: str, changes: Mapping[str, Any]) -> Task:
        updates = normalize_changes(changes)
        oid = to_object_id(task_id)
        with _translate_errors("update a task"):
            if updates:
                doc = self.collection.find_one_and_update(
                    {"_id": oid},
                    {"$set": updates},
                    return_document=ReturnDocument.AFTER,
                )
            else:
                doc = self.collection.find_one({"_id": oid})
        if doc is None:
            raise NotFound()
        return serialize_doc(doc)

    def delete(self, task_id: str) -> None:
        oid = to_object_id(task_id)
        with _translate_errors("delete a task"):
            res = self.collection.delete_one({"_id": oid})
        if res.deleted_count == 0:
            raise NotFound()

    def clear(self) -> None:
        with _translate_errors("drop the tasks collection"):
            self.collection.drop()

    def close(self) -> None:
        self.client.close()
