"""Use-cases on board reservations."""

from __future__ import annotations

import logging
from typing import Any

from weeklydraw.models import Reservation
from weeklydraw.repositories.collection_repository import CollectionRepository
from weeklydraw.stores.base import CollectionStore

logger = logging.getLogger(__name__)

NAMES_KEY = "names"


class ReservationService:
    def __init__(self, retries: int = 3) -> None:
        self._retries = retries

    def _repo(self, store: CollectionStore) -> CollectionRepository:
        return CollectionRepository(store, NAMES_KEY, retries=self._retries)

    def list_reservations(self, store: CollectionStore) -> list[dict[str, Any]]:
        return self._repo(store).load()

    def reserve(self, store: CollectionStore, number: int, nickname: str | None) -> Reservation | None:
        """Upsert the slot; a blank nickname releases it. Returns the active reservation."""

        reservation = Reservation(number=int(number), nickname=nickname or "")

        def _mutate(items: list[dict[str, Any]]) -> list[dict[str, Any]]:
            kept = [item for item in items if Reservation.from_dict(item).number != reservation.number]
            if reservation.is_active:
                kept.append(reservation.to_dict())
            return kept

        self._repo(store).update(_mutate)
        if not reservation.is_active:
            logger.info("Released slot %s", reservation.number)
            return None
        return reservation

    def clear(self, store: CollectionStore) -> None:
        self._repo(store).update(lambda _items: [])
        logger.info("Cleared all reservations")
