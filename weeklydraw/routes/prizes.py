"""Prize inventory routes."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from weeklydraw.db import get_store
from weeklydraw.schemas.prize import PrizeCounterSchema, UpdatePrizeSchema
from weeklydraw.services.prize_service import PrizeService
from weeklydraw.utils.responses import ok

prizes_bp = Blueprint("prizes", __name__)

_prizes_schema = PrizeCounterSchema(many=True)
_prize_schema = PrizeCounterSchema()
_update_schema = UpdatePrizeSchema()


def _service() -> PrizeService:
    return PrizeService(retries=int(current_app.config.get("STORE_WRITE_RETRIES", 3)))


@prizes_bp.get("/prizes")
def list_prizes():
    return ok(_prizes_schema.dump(_service().list_prizes(get_store())))


@prizes_bp.post("/update-prize")
def update_prize():
    data = _update_schema.load(request.get_json(silent=True) or {})
    prize = _service().update_count(get_store(), data["prize"], data["count"])
    return ok(_prize_schema.dump(prize))
