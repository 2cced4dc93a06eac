"""Health check and scheduler status routes."""

from __future__ import annotations

from flask import Blueprint, current_app

from weeklydraw.scheduler import get_monitor
from weeklydraw.services.schedule_service import next_draw_at
from weeklydraw.utils.responses import ok

health_bp = Blueprint("health", __name__)


@health_bp.get("/health")
def health_check():
    """Health check endpoint."""

    return ok({"status": "ok"})


@health_bp.get("/next-draw")
def next_draw():
    """Scheduler state; the computed next instant when nothing is armed."""

    monitor = get_monitor()
    next_at = monitor.next_at
    if next_at is None:
        next_at = next_draw_at(current_app.extensions["clock"].now(), current_app.extensions["draw_rule"])
    return ok(
        {
            "state": monitor.state.value if monitor.state else None,
            "next_draw_at": next_at.isoformat(),
        }
    )
