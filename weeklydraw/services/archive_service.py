"""Archived snapshots under the ``log/`` prefix."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from werkzeug.utils import secure_filename

from weeklydraw.errors import ConflictError, NotFoundError, ValidationError
from weeklydraw.repositories.collection_repository import CollectionRepository
from weeklydraw.services.draw_service import HISTORY_KEY
from weeklydraw.services.reservation_service import NAMES_KEY
from weeklydraw.services.schedule_service import DEFAULT_RULE, DrawRule, to_reference
from weeklydraw.stores.base import CollectionStore

logger = logging.getLogger(__name__)

LOG_PREFIX = "log/"
SUFFIX = ".json"


def _stem(filename: str) -> str:
    safe = secure_filename(filename or "")
    if not safe.endswith(SUFFIX) or safe == SUFFIX:
        raise ValidationError(message="Invalid file name", details={"filename": filename})
    return safe[: -len(SUFFIX)]


def default_archive_name(now: datetime, rule: DrawRule = DEFAULT_RULE) -> str:
    return to_reference(now, rule).strftime("history-%Y-%m-%d-%H%M%S") + SUFFIX


class ArchiveService:
    def list_files(self, store: CollectionStore) -> list[str]:
        try:
            stems = store.list_keys(LOG_PREFIX)
        except NotFoundError as exc:
            raise NotFoundError(message="Log directory not found") from exc
        return [f"{stem}{SUFFIX}" for stem in stems]

    def get_file(self, store: CollectionStore, filename: str) -> Any:
        try:
            value, _ = store.read(LOG_PREFIX + _stem(filename))
        except NotFoundError as exc:
            raise NotFoundError(message="File not found", details={"filename": filename}) from exc
        return value

    def save(self, store: CollectionStore, filename: str) -> str:
        """Snapshot history and reservations into a new archive file."""

        stem = _stem(filename)
        snapshot = {
            "history": CollectionRepository(store, HISTORY_KEY).load(),
            "names": CollectionRepository(store, NAMES_KEY).load(),
        }
        try:
            store.write(LOG_PREFIX + stem, snapshot, None)
        except ConflictError as exc:
            raise ConflictError(message="Archive already exists", details={"filename": filename}) from exc
        logger.info("Archived history to %s%s", stem, SUFFIX)
        return f"{stem}{SUFFIX}"
