"""Flask application package."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from flask import Flask

try:
    from dotenv import load_dotenv
except Exception:  # pragma: no cover
    load_dotenv = None  # type: ignore[assignment]


def create_app(
    test_config: Mapping[str, Any] | None = None,
    *,
    store=None,
    clock=None,
    timer=None,
) -> Flask:
    """Application factory.

    Args:
        test_config: Overrides applied on top of the environment config.
        store: Persistence adapter to use instead of the configured one.
        clock: Clock for the draw scheduler (defaults to system time).
        timer: One-shot timer for the draw scheduler (defaults to APScheduler).

    Returns:
        Configured Flask application.
    """
    if load_dotenv is not None:
        load_dotenv()

    from weeklydraw.config import get_config
    from weeklydraw.cors import register_cors
    from weeklydraw.db import init_store
    from weeklydraw.error_handlers import register_error_handlers
    from weeklydraw.logging_config import configure_logging
    from weeklydraw.routes.auth import auth_bp
    from weeklydraw.routes.health import health_bp
    from weeklydraw.routes.history import history_bp
    from weeklydraw.routes.logs import logs_bp
    from weeklydraw.routes.names import names_bp
    from weeklydraw.routes.prizes import prizes_bp
    from weeklydraw.scheduler import init_scheduler

    app = Flask(__name__)
    app.config.from_object(get_config())
    if test_config:
        app.config.update(test_config)

    configure_logging(app)
    register_error_handlers(app)
    register_cors(app)
    store = init_store(app, store)

    app.register_blueprint(health_bp)
    app.register_blueprint(history_bp)
    app.register_blueprint(names_bp)
    app.register_blueprint(prizes_bp)
    app.register_blueprint(logs_bp)
    app.register_blueprint(auth_bp)

    init_scheduler(app, store, clock=clock, timer=timer)

    return app
