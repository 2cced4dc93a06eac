"""Recovery monitor: keeps exactly one draw armed for the process lifetime.

States:

- ``CHECKING``: deciding whether the expected draw instant already passed
  (right after startup). Overdue means the process missed a slot, so the
  draw runs immediately.
- ``ARMED``: a one-shot timer is pending for ``next_at``.

Each firing draws, computes the following instant and re-arms, so the
monitor never leaves ``ARMED`` for long and has no terminal state.
"""

from __future__ import annotations

import enum
import logging
from datetime import datetime
from threading import RLock

from weeklydraw.errors import AppError
from weeklydraw.repositories.collection_repository import CollectionRepository
from weeklydraw.services.draw_service import HISTORY_KEY, DrawGenerator
from weeklydraw.services.schedule_service import (
    DEFAULT_RULE,
    DrawRule,
    draw_instant_for,
    next_draw_at,
    parse_draw_date,
)
from weeklydraw.stores.base import CollectionStore
from weeklydraw.utils.clock import Clock, SystemClock, Timer

logger = logging.getLogger(__name__)

ARM_ATTEMPTS = 3


class MonitorState(str, enum.Enum):
    CHECKING = "CHECKING"
    ARMED = "ARMED"


def last_draw_instant(store: CollectionStore, rule: DrawRule = DEFAULT_RULE) -> datetime | None:
    """Draw instant of the latest dated record in history, if any."""

    items = CollectionRepository(store, HISTORY_KEY).load()
    latest = None
    for item in items:
        try:
            day = parse_draw_date(str(item.get("date") or ""))
        except ValueError:
            continue
        if latest is None or day > latest:
            latest = day
    return draw_instant_for(latest, rule) if latest is not None else None


class RecoveryMonitor:
    def __init__(
        self,
        generator: DrawGenerator,
        timer: Timer,
        store: CollectionStore | None = None,
        rule: DrawRule = DEFAULT_RULE,
        clock: Clock | None = None,
    ) -> None:
        self._generator = generator
        self._timer = timer
        self._store = store
        self._rule = rule
        self._clock = clock or SystemClock()
        self._lock = RLock()
        self._state: MonitorState | None = None
        self._next_at: datetime | None = None

    @property
    def state(self) -> MonitorState | None:
        return self._state

    @property
    def next_at(self) -> datetime | None:
        return self._next_at

    def _startup_anchor(self, now: datetime) -> datetime:
        # The slot after the last persisted draw; if it already passed, it was missed.
        if self._store is None:
            return now
        try:
            last = last_draw_instant(self._store, self._rule)
        except AppError as exc:
            logger.error("Cannot read history for missed-draw check: %s", exc.message)
            return now
        if last is None or last > now:
            return now
        return last

    def start(self) -> None:
        """Compute the expected instant, then run the startup check."""

        with self._lock:
            now = self._clock.now()
            self._next_at = next_draw_at(self._startup_anchor(now), self._rule)
            self._state = MonitorState.CHECKING
            logger.info("Draw monitor started, expected draw at %s", self._next_at.isoformat())
            self.check()

    def check(self) -> None:
        """Fire now if ``next_at`` passed, otherwise arm the timer for it."""

        with self._lock:
            now = self._clock.now()
            if self._next_at is None:
                self._next_at = next_draw_at(now, self._rule)
            self._state = MonitorState.CHECKING

            if now >= self._next_at:
                logger.warning("Missed draw scheduled for %s, drawing now", self._next_at.isoformat())
                self.fire()
            else:
                self._arm(self._next_at)

    def fire(self) -> None:
        """Timer callback: draw, then arm the following slot."""

        with self._lock:
            try:
                self._generator.generate()
            except Exception:
                logger.exception("Draw generation failed")

            now = self._clock.now()
            previous = self._next_at or now
            self._next_at = next_draw_at(max(now, previous), self._rule)
            self._arm(self._next_at)

    def _arm(self, at: datetime) -> None:
        for attempt in range(1, ARM_ATTEMPTS + 1):
            try:
                self._timer.arm(at, self.fire)
            except Exception:
                logger.exception(
                    "Failed to arm draw timer for %s (attempt %d/%d)", at.isoformat(), attempt, ARM_ATTEMPTS
                )
                continue
            self._state = MonitorState.ARMED
            logger.info("Next draw armed for %s", at.isoformat())
            return
        # Stays CHECKING; the next start() or check() call arms again.
        self._state = MonitorState.CHECKING
        logger.error("Draw timer not armed for %s", at.isoformat())

    def stop(self) -> None:
        with self._lock:
            self._timer.cancel()
            self._timer.shutdown()
