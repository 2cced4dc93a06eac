"""Collections as MongoDB documents with an integer version counter."""

from __future__ import annotations

import re
from typing import Any

from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from weeklydraw.errors import ConflictError, NotFoundError, StoreUnavailableError
from weeklydraw.stores.base import CollectionStore


class MongoStore(CollectionStore):
    """One document per key: ``{"_id": key, "items": [...], "version": n}``."""

    name = "mongo"

    def __init__(self, collection: Collection) -> None:
        self._col = collection

    @classmethod
    def connect(cls, uri: str, db_name: str, timeout_seconds: float = 10.0) -> "MongoStore":
        from pymongo import MongoClient

        timeout_ms = int(timeout_seconds * 1000)
        client = MongoClient(
            uri,
            serverSelectionTimeoutMS=timeout_ms,
            connectTimeoutMS=timeout_ms,
            socketTimeoutMS=timeout_ms,
        )
        return cls(client[db_name]["collections"])

    def read(self, key: str) -> tuple[Any, str]:
        try:
            doc = self._col.find_one({"_id": key})
        except PyMongoError as exc:
            raise StoreUnavailableError(message="MongoDB read failed", details=str(exc)) from exc
        if not doc:
            raise NotFoundError(message=f"Collection {key} not found")
        return doc.get("items"), str(int(doc.get("version") or 0))

    def write(self, key: str, value: Any, token: str | None) -> str:
        try:
            if token is None:
                self._col.insert_one({"_id": key, "items": value, "version": 1})
                return "1"

            expected = int(token)
            doc = self._col.find_one_and_update(
                {"_id": key, "version": expected},
                {"$set": {"items": value}, "$inc": {"version": 1}},
            )
        except DuplicateKeyError as exc:
            raise ConflictError(message=f"Collection {key} already exists") from exc
        except ValueError as exc:
            raise ConflictError(message=f"Invalid version token for {key}", details=token) from exc
        except PyMongoError as exc:
            raise StoreUnavailableError(message="MongoDB write failed", details=str(exc)) from exc

        if doc is None:
            raise ConflictError(message=f"Collection {key} changed since it was read")
        return str(expected + 1)

    def list_keys(self, prefix: str) -> list[str]:
        try:
            docs = self._col.find({"_id": {"$regex": f"^{re.escape(prefix)}"}}, {"_id": 1})
            keys = [str(d["_id"])[len(prefix):] for d in docs]
        except PyMongoError as exc:
            raise StoreUnavailableError(message="MongoDB query failed", details=str(exc)) from exc
        if not keys:
            raise NotFoundError(message=f"Directory {prefix} not found")
        return sorted(keys)

    def close(self) -> None:
        self._col.database.client.close()
