"""Background draw scheduler wiring (APScheduler)."""

from __future__ import annotations

import atexit
import logging
from collections.abc import Callable
from datetime import datetime

from apscheduler.schedulers.background import BackgroundScheduler
from flask import Flask, current_app

from weeklydraw.services.draw_service import DrawGenerator
from weeklydraw.services.recovery_service import RecoveryMonitor
from weeklydraw.services.schedule_service import DrawRule
from weeklydraw.stores.base import CollectionStore
from weeklydraw.utils.clock import Clock, SystemClock, Timer

logger = logging.getLogger(__name__)

JOB_ID = "next-draw"


class APSchedulerTimer:
    """One-shot timer backed by a single ``date``-triggered APScheduler job."""

    def __init__(self, scheduler: BackgroundScheduler | None = None) -> None:
        self._scheduler = scheduler or BackgroundScheduler()

    def arm(self, at: datetime, callback: Callable[[], None]) -> None:
        if not self._scheduler.running:
            self._scheduler.start()
        self._scheduler.add_job(
            callback,
            trigger="date",
            run_date=at,
            id=JOB_ID,
            replace_existing=True,
            misfire_grace_time=None,
            coalesce=True,
            max_instances=1,
        )

    def cancel(self) -> None:
        if self._scheduler.get_job(JOB_ID) is not None:
            self._scheduler.remove_job(JOB_ID)

    def shutdown(self) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)


def rule_from_config(config) -> DrawRule:
    return DrawRule.from_config(
        str(config.get("DRAW_WEEKDAYS", "2,6")),
        str(config.get("DRAW_TIME", "00:01")),
        int(config.get("DRAW_UTC_OFFSET_HOURS", 3)),
    )


def build_monitor(
    store: CollectionStore,
    rule: DrawRule,
    clock: Clock | None = None,
    timer: Timer | None = None,
) -> RecoveryMonitor:
    clock = clock or SystemClock()
    generator = DrawGenerator(store, rule=rule, clock=clock)
    return RecoveryMonitor(generator, timer or APSchedulerTimer(), store=store, rule=rule, clock=clock)


def init_scheduler(
    app: Flask,
    store: CollectionStore,
    clock: Clock | None = None,
    timer: Timer | None = None,
) -> RecoveryMonitor:
    """Create the monitor and start it unless SCHEDULER_ENABLED is off.

    The monitor is always registered so ``/next-draw`` can report on it.
    """

    clock = clock or SystemClock()
    rule = rule_from_config(app.config)
    monitor = build_monitor(store, rule, clock=clock, timer=timer)
    app.extensions["draw_monitor"] = monitor
    app.extensions["draw_rule"] = rule
    app.extensions["clock"] = clock

    if app.config.get("SCHEDULER_ENABLED", True):
        monitor.start()
        if timer is None:
            atexit.register(monitor.stop)
    else:
        logger.info("Draw scheduler disabled")
    return monitor


def get_monitor() -> RecoveryMonitor:
    monitor: RecoveryMonitor | None = current_app.extensions.get("draw_monitor")
    if monitor is None:
        raise RuntimeError("Draw scheduler not initialized")
    return monitor
