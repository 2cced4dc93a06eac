"""Read-modify-write access to one JSON collection."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from weeklydraw.errors import ConflictError, NotFoundError
from weeklydraw.stores.base import CollectionStore

logger = logging.getLogger(__name__)

Mutator = Callable[[list[dict[str, Any]]], list[dict[str, Any]]]


class CollectionRepository:
    """Load and conditionally rewrite a list-valued collection."""

    def __init__(self, store: CollectionStore, key: str, retries: int = 3) -> None:
        self._store = store
        self.key = key
        self._retries = max(int(retries), 1)

    def load_versioned(self) -> tuple[list[dict[str, Any]], str | None]:
        """Current items and token; an absent collection is empty with no token."""

        try:
            value, token = self._store.read(self.key)
        except NotFoundError:
            return [], None
        return list(value or []), token

    def load(self) -> list[dict[str, Any]]:
        items, _ = self.load_versioned()
        return items

    def load_existing(self) -> list[dict[str, Any]]:
        """Like ``load`` but an absent collection raises NotFoundError."""

        value, _ = self._store.read(self.key)
        return list(value or [])

    def update(self, mutator: Mutator) -> list[dict[str, Any]]:
        """Apply ``mutator`` to fresh items and write them back.

        A stale token triggers a re-read and another attempt. Errors raised
        by ``mutator`` abort the update without writing.
        """

        for attempt in range(1, self._retries + 1):
            items, token = self.load_versioned()
            updated = mutator([dict(item) for item in items])
            try:
                self._store.write(self.key, updated, token)
                return updated
            except ConflictError:
                if attempt == self._retries:
                    raise
                logger.info("Conflict writing %s, retrying (%s/%s)", self.key, attempt, self._retries)

        raise ConflictError(message=f"Could not update {self.key}")

    def append(self, item: dict[str, Any]) -> list[dict[str, Any]]:
        return self.update(lambda items: [*items, item])
