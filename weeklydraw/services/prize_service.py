"""Use-cases on prize inventory."""

from __future__ import annotations

from typing import Any

from weeklydraw.errors import NotFoundError
from weeklydraw.models import PrizeCounter
from weeklydraw.repositories.collection_repository import CollectionRepository
from weeklydraw.stores.base import CollectionStore

PRIZES_KEY = "prizes"


class PrizeService:
    def __init__(self, retries: int = 3) -> None:
        self._retries = retries

    def _repo(self, store: CollectionStore) -> CollectionRepository:
        return CollectionRepository(store, PRIZES_KEY, retries=self._retries)

    def list_prizes(self, store: CollectionStore) -> list[dict[str, Any]]:
        """Prize counters; an absent collection is NotFound, not empty."""

        return self._repo(store).load_existing()

    def update_count(self, store: CollectionStore, prize: str, count: int) -> dict[str, Any]:
        found: dict[str, Any] = {}

        def _mutate(items: list[dict[str, Any]]) -> list[dict[str, Any]]:
            for index, item in enumerate(items):
                counter = PrizeCounter.from_dict(item)
                if counter.prize == prize:
                    counter.count = int(count)
                    items[index] = {**item, **counter.to_dict()}
                    found.update(items[index])
                    return items
            raise NotFoundError(message="Prize not found", details={"prize": prize})

        self._repo(store).update(_mutate)
        return found
