"""Reservation routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from weeklydraw.db import get_store
from weeklydraw.schemas.reservation import ReservationSchema, ReserveSchema
from weeklydraw.services.reservation_service import ReservationService
from weeklydraw.utils.responses import ok

names_bp = Blueprint("names", __name__)

_reservations_schema = ReservationSchema(many=True)
_reserve_schema = ReserveSchema()


def _service() -> ReservationService:
    return ReservationService(retries=int(current_app.config.get("STORE_WRITE_RETRIES", 3)))


@names_bp.get("/names")
def list_names():
    return ok(_reservations_schema.dump(_service().list_reservations(get_store())))


@names_bp.post("/reserve")
def reserve():
    """Claim a slot, or release it when the nickname is blank."""

    data = _reserve_schema.load(request.get_json(silent=True) or {})
    reservation = _service().reserve(get_store(), data["number"], data.get("nickname"))
    return ok({"number": data["number"], "reserved": reservation is not None})


@names_bp.post("/clear-names")
def clear_names():
    _service().clear(get_store())
    return ok({"cleared": True})
