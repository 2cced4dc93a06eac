"""Archived history snapshots."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from weeklydraw.db import get_store
from weeklydraw.schemas.misc import SaveToLogSchema
from weeklydraw.services.archive_service import ArchiveService, default_archive_name
from weeklydraw.utils.responses import ok

logs_bp = Blueprint("logs", __name__)

_save_schema = SaveToLogSchema()
_service = ArchiveService()


@logs_bp.get("/log")
def list_logs():
    return ok(_service.list_files(get_store()))


@logs_bp.get("/log/<filename>")
def get_log(filename: str):
    return ok(_service.get_file(get_store(), filename))


@logs_bp.post("/save-to-log")
def save_to_log():
    data = _save_schema.load(request.get_json(silent=True) or {})
    filename = data.get("filename")
    if not filename:
        clock = current_app.extensions["clock"]
        filename = default_archive_name(clock.now(), current_app.extensions["draw_rule"])
    saved = _service.save(get_store(), filename)
    return ok({"filename": saved}, status_code=201)
