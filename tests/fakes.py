# tests/fakes.py

from __future__ import annotations

import copy
from types import SimpleNamespace

from pymongo.errors import ServerSelectionTimeoutError


class FakeCursor:
    def __init__(self, docs: list[dict]) -> None:
        self._docs = docs

    def sort(self, keys):
        docs = list(self._docs)
        # Stable sorts applied from the least significant key up.
        for field, direction in reversed(keys):
            docs.sort(key=lambda d: d[field], reverse=direction < 0)
        return FakeCursor(docs)

    def __iter__(self):
        return iter(copy.deepcopy(self._docs))


class FakeCollection:
    """
    Tiny subset of pymongo's Collection, enough for MongoTaskStore.

    Set ``fail = True`` to make every call raise like an unreachable server.
    """

    def __init__(self) -> None:
        self.docs: list[dict] = []
        self.indexes: list = []
        self.fail = False

    def _check(self) -> None:
        if self.fail:
            raise ServerSelectionTimeoutError("localhost:27017: connection refused")

    def _find(self, query: dict) -> dict | None:
        for doc in self.docs:
            if all(doc.get(k) == v for k, v in query.items()):
                return doc
        return None

    def create_index(self, keys):
        self._check()
        self.indexes.append(keys)

    def insert_one(self, doc: dict):
        self._check()
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    def find(self, query: dict | None = None):
        self._check()
        query = query or {}
        return FakeCursor([d for d in self.docs if all(d.get(k) == v for k, v in query.items())])

    def find_one(self, query: dict):
        self._check()
        doc = self._find(query)
        return copy.deepcopy(doc) if doc is not None else None

    def find_one_and_update(self, query: dict, update: dict, return_document=False):
        self._check()
        doc = self._find(query)
        if doc is None:
            return None
        before = copy.deepcopy(doc)
        doc.update(update["$set"])
        return copy.deepcopy(doc) if return_document else before

    def delete_one(self, query: dict):
        self._check()
        doc = self._find(query)
        if doc is None:
            return SimpleNamespace(deleted_count=0)
        self.docs.remove(doc)
        return SimpleNamespace(deleted_count=1)

    def drop(self):
        self._check()
        self.docs.clear()


class FakeAdmin:
    def __init__(self, client: FakeMongoClient) -> None:
        self._client = client

    def command(self, name: str):
        self._client.commands.append(name)
        if self._client.ping_failures > 0:
            self._client.ping_failures -= 1
            raise ServerSelectionTimeoutError("localhost:27017: connection refused")
        if self._client.collection.fail:
            raise ServerSelectionTimeoutError("localhost:27017: connection refused")
        return {"ok": 1.0}


class FakeMongoClient:
    """
    Stand-in for MongoClient: ``client[db][collection]`` always yields one FakeCollection.

    ``ping_failures`` makes the next N pings fail before the server "comes up".
    """

    def __init__(self, ping_failures: int = 0) -> None:
        self.collection = FakeCollection()
        self.admin = FakeAdmin(self)
        self.ping_failures = ping_failures
        self.commands: list[str] = []
        self.closed = False

    def __getitem__(self, name: str):
        return _FakeDatabase(self.collection)

    def close(self) -> None:
        self.closed = True


class _FakeDatabase:
    def __init__(self, collection: FakeCollection) -> None:
        self._collection = collection

    def __getitem__(self, name: str) -> FakeCollection:
        return self._collection
