"""Schemas for auth and log archive requests."""

from __future__ import annotations

from marshmallow import Schema, fields


class AuthSchema(Schema):
    password = fields.String(required=True)


class SaveToLogSchema(Schema):
    filename = fields.String(required=False, load_default=None, allow_none=True)
