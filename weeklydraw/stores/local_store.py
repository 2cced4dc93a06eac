"""JSON files on local disk, one file per collection."""

from __future__ import annotations

import hashlib
import json
import logging
import os
import tempfile
from threading import Lock
from typing import Any

from weeklydraw.errors import ConflictError, NotFoundError, StoreUnavailableError
from weeklydraw.stores.base import CollectionStore

logger = logging.getLogger(__name__)


def _digest(raw: bytes) -> str:
    return hashlib.sha256(raw).hexdigest()


class LocalStore(CollectionStore):
    """Keys map to ``<root>/<key>.json``; the token is the SHA-256 of the file."""

    name = "local"

    def __init__(self, root: str) -> None:
        self._root = os.path.abspath(root)
        self._lock = Lock()

    def _path(self, key: str) -> str:
        path = os.path.abspath(os.path.join(self._root, f"{key}.json"))
        if not path.startswith(self._root + os.sep):
            raise NotFoundError(message=f"Invalid collection key: {key}")
        return path

    def _read_raw(self, path: str) -> bytes | None:
        try:
            with open(path, "rb") as f:
                return f.read()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StoreUnavailableError(message=f"Cannot read {path}", details=str(exc)) from exc

    def read(self, key: str) -> tuple[Any, str]:
        path = self._path(key)
        raw = self._read_raw(path)
        if raw is None:
            raise NotFoundError(message=f"Collection {key} not found")
        try:
            value = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.error("Corrupt JSON in %s", path)
            raise StoreUnavailableError(message=f"Corrupt collection {key}", details=str(exc)) from exc
        return value, _digest(raw)

    def write(self, key: str, value: Any, token: str | None) -> str:
        path = self._path(key)
        payload = json.dumps(value, ensure_ascii=False, indent=2).encode("utf-8")

        with self._lock:
            current = self._read_raw(path)
            current_token = _digest(current) if current is not None else None
            if current_token != token:
                raise ConflictError(
                    message=f"Collection {key} changed since it was read",
                    details={"expected": token, "actual": current_token},
                )

            directory = os.path.dirname(path)
            try:
                os.makedirs(directory, exist_ok=True)
                tmp_fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".", suffix=".tmp")
                with os.fdopen(tmp_fd, "wb") as f:
                    f.write(payload)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_path, path)
            except OSError as exc:
                raise StoreUnavailableError(message=f"Cannot write {path}", details=str(exc)) from exc

        return _digest(payload)

    def list_keys(self, prefix: str) -> list[str]:
        directory = os.path.join(self._root, prefix)
        if not os.path.isdir(directory):
            raise NotFoundError(message=f"Directory {prefix} not found")
        return sorted(
            name[: -len(".json")]
            for name in os.listdir(directory)
            if name.endswith(".json") and not name.startswith(".")
        )
