"""Shared-secret check."""

from __future__ import annotations

import hmac

from flask import Blueprint, current_app, request

from weeklydraw.errors import AuthError
from weeklydraw.schemas.misc import AuthSchema
from weeklydraw.utils.responses import ok

auth_bp = Blueprint("auth", __name__)

_schema = AuthSchema()


@auth_bp.post("/auth")
def auth():
    data = _schema.load(request.get_json(silent=True) or {})
    expected = str(current_app.config.get("ADMIN_PASSWORD", ""))
    if not expected or not hmac.compare_digest(str(data["password"]).encode(), expected.encode()):
        raise AuthError()
    return ok({"authenticated": True})
