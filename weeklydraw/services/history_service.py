"""Use-cases on the draw history collection."""

from __future__ import annotations

import logging
from typing import Any

from weeklydraw.errors import NotFoundError
from weeklydraw.models import DrawRecord
from weeklydraw.repositories.collection_repository import CollectionRepository
from weeklydraw.services.draw_service import HISTORY_KEY
from weeklydraw.stores.base import CollectionStore

logger = logging.getLogger(__name__)

DEFAULT_WINNER_NAME = "Unknown"


class HistoryService:
    def __init__(self, retries: int = 3) -> None:
        self._retries = retries

    def _repo(self, store: CollectionStore) -> CollectionRepository:
        return CollectionRepository(store, HISTORY_KEY, retries=self._retries)

    def list_history(self, store: CollectionStore) -> list[dict[str, Any]]:
        return self._repo(store).load()

    def add(self, store: CollectionStore, data: dict[str, Any]) -> DrawRecord:
        record = DrawRecord(
            date=str(data["date"]),
            number=int(data["number"]),
            name=str(data.get("name") or DEFAULT_WINNER_NAME),
            prize=str(data.get("prize") or ""),
            chosen_number=data.get("chosenNumber"),
        )
        self._repo(store).append(record.to_dict())
        logger.info("Added history record %s/%s", record.date, record.number)
        return record

    def replace(self, store: CollectionStore, records: list[dict[str, Any]]) -> list[dict[str, Any]]:
        cleaned = [DrawRecord.from_dict(r).to_dict() for r in records]
        return self._repo(store).update(lambda _items: cleaned)

    def update_winner(self, store: CollectionStore, date: str, number: int, name: str | None) -> dict[str, Any]:
        """Set the winner name of the record keyed by date and number."""

        found: dict[str, Any] = {}

        def _mutate(items: list[dict[str, Any]]) -> list[dict[str, Any]]:
            for item in items:
                if DrawRecord.from_dict(item).matches(date, number):
                    item["name"] = name or ""
                    found.update(item)
                    return items
            raise NotFoundError(message="Record not found", details={"date": date, "number": number})

        self._repo(store).update(_mutate)
        return found

    def update_winner_prize(
        self, store: CollectionStore, date: str, name: str, prize: str | None
    ) -> list[dict[str, Any]]:
        """Assign a prize to the winner ``name`` of ``date``; returns the new history."""

        def _mutate(items: list[dict[str, Any]]) -> list[dict[str, Any]]:
            for item in items:
                if item.get("date") == date and item.get("name") == name:
                    item["prize"] = prize or ""
                    return items
            raise NotFoundError(message="Winner not found", details={"date": date, "name": name})

        updated = self._repo(store).update(_mutate)
        logger.info("Prize %r saved for %s (%s)", prize, name, date)
        return updated

    def delete(self, store: CollectionStore, date: str, number: int) -> None:
        def _mutate(items: list[dict[str, Any]]) -> list[dict[str, Any]]:
            kept = [item for item in items if not DrawRecord.from_dict(item).matches(date, number)]
            if len(kept) == len(items):
                raise NotFoundError(message="Record not found", details={"date": date, "number": number})
            return kept

        self._repo(store).update(_mutate)
        logger.info("Deleted history record %s/%s", date, number)
