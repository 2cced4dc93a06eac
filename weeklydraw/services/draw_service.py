"""Scheduled draw generation."""

from __future__ import annotations

import logging
import random

from weeklydraw.errors import AppError
from weeklydraw.models import DrawRecord
from weeklydraw.repositories.collection_repository import CollectionRepository
from weeklydraw.services.schedule_service import DEFAULT_RULE, DrawRule, format_draw_date
from weeklydraw.stores.base import CollectionStore
from weeklydraw.utils.clock import Clock, SystemClock

logger = logging.getLogger(__name__)

HISTORY_KEY = "history"
MIN_NUMBER = 1
MAX_NUMBER = 100


class DrawGenerator:
    """Draw one number and append it to the history collection."""

    def __init__(
        self,
        store: CollectionStore,
        rule: DrawRule = DEFAULT_RULE,
        clock: Clock | None = None,
        rng: random.Random | None = None,
    ) -> None:
        # Single attempt: a failed persist is recovered by the next draw.
        self._history = CollectionRepository(store, HISTORY_KEY, retries=1)
        self._rule = rule
        self._clock = clock or SystemClock()
        self._rng = rng or random.SystemRandom()

    def make_record(self) -> DrawRecord:
        return DrawRecord(
            date=format_draw_date(self._clock.now(), self._rule),
            number=self._rng.randint(MIN_NUMBER, MAX_NUMBER),
        )

    def generate(self) -> DrawRecord:
        """Draw and persist; persistence errors are logged, never raised."""

        record = self.make_record()
        try:
            self._history.append(record.to_dict())
        except AppError as exc:
            logger.error("Failed to persist draw %s on %s: %s", record.number, record.date, exc.message)
        except Exception:
            logger.exception("Unexpected error persisting draw %s on %s", record.number, record.date)
        else:
            logger.info("Drew number %s for %s", record.number, record.date)
        return record
