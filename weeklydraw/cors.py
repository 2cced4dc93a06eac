"""CORS for the browser front-end (Flask-CORS)."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

ALLOWED_METHODS = ["GET", "POST", "DELETE", "OPTIONS"]


def register_cors(app: Flask) -> None:
    origins = [o.strip() for o in str(app.config.get("CORS_ORIGINS", "*")).split(",") if o.strip()]
    # Preflights echo whatever request headers the browser asks for.
    CORS(
        app,
        origins=origins or "*",
        methods=ALLOWED_METHODS,
        allow_headers="*",
        send_wildcard="*" in origins,
    )
