"""Draw history routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from weeklydraw.db import get_store
from weeklydraw.schemas.history import (
    AddHistorySchema,
    DrawRecordSchema,
    HistoryKeySchema,
    SaveHistorySchema,
    UpdateWinnerPrizeSchema,
    UpdateWinnerSchema,
)
from weeklydraw.services.history_service import HistoryService
from weeklydraw.utils.responses import ok

history_bp = Blueprint("history", __name__)

_records_schema = DrawRecordSchema(many=True)
_record_schema = DrawRecordSchema()
_add_schema = AddHistorySchema()
_save_schema = SaveHistorySchema()
_key_schema = HistoryKeySchema()
_winner_schema = UpdateWinnerSchema()
_winner_prize_schema = UpdateWinnerPrizeSchema()


def _service() -> HistoryService:
    return HistoryService(retries=int(current_app.config.get("STORE_WRITE_RETRIES", 3)))


@history_bp.get("/history")
def list_history():
    """Full history, empty when nothing was drawn yet."""

    return ok(_records_schema.dump(_service().list_history(get_store())))


@history_bp.post("/add-history")
def add_history():
    data = _add_schema.load(request.get_json(silent=True) or {})
    record = _service().add(get_store(), data)
    return ok(_record_schema.dump(record.to_dict()), status_code=201)


@history_bp.post("/save-history")
def save_history():
    payload = request.get_json(silent=True)
    data = _save_schema.load(payload if payload is not None else {})
    saved = _service().replace(get_store(), data["history"])
    return ok(_records_schema.dump(saved))


@history_bp.post("/update-winner")
def update_winner():
    data = _winner_schema.load(request.get_json(silent=True) or {})
    record = _service().update_winner(get_store(), data["date"], data["number"], data.get("name"))
    return ok(_record_schema.dump(record))


@history_bp.post("/update-winner-prize")
def update_winner_prize():
    data = _winner_prize_schema.load(request.get_json(silent=True) or {})
    history = _service().update_winner_prize(get_store(), data["date"], data["name"], data.get("prize"))
    return ok({"history": _records_schema.dump(history)})


@history_bp.post("/delete-history")
def delete_history():
    data = _key_schema.load(request.get_json(silent=True) or {})
    _service().delete(get_store(), data["date"], data["number"])
    return ok({"deleted": {"date": data["date"], "number": data["number"]}})


@history_bp.delete("/history/<date>/<int:number>")
def delete_history_record(date: str, number: int):
    data = _key_schema.load({"date": date, "number": number})
    _service().delete(get_store(), data["date"], data["number"])
    return ok({"deleted": {"date": data["date"], "number": data["number"]}})
