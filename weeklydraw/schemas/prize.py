"""Schemas for prize inventory."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class PrizeCounterSchema(Schema):
    prize = fields.Str(required=True)
    count = fields.Int(required=True)


class UpdatePrizeSchema(Schema):
    prize = fields.String(required=True, validate=validate.Length(min=1))
    count = fields.Integer(required=True, strict=False, validate=validate.Range(min=0))
