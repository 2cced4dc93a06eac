"""Schemas for board reservations."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class ReservationSchema(Schema):
    number = fields.Int(required=True)
    nickname = fields.Str(required=True)


class ReserveSchema(Schema):
    """An empty or missing nickname releases the slot."""

    number = fields.Integer(required=True, strict=False, validate=validate.Range(min=1, max=100))
    nickname = fields.String(required=False, load_default="", allow_none=True)
