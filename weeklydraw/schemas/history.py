"""Schemas for the draw history API."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, ValidationError, fields, pre_load, validate, validates

from weeklydraw.services.schedule_service import parse_draw_date

_number = validate.Range(min=1, max=100)


class DrawDate(fields.String):
    """``dd.mm.yyyy`` date kept as text."""

    def _deserialize(self, value, attr, data, **kwargs):  # type: ignore[no-untyped-def]
        text = super()._deserialize(value, attr, data, **kwargs).strip()
        try:
            parse_draw_date(text)
        except ValueError as exc:
            raise ValidationError("Date must be formatted as dd.mm.yyyy") from exc
        return text


class DrawRecordSchema(Schema):
    """Serialize a stored history record."""

    class Meta:
        unknown = EXCLUDE

    date = fields.String(required=True)
    number = fields.Integer(required=True)
    name = fields.String(load_default="", dump_default="")
    prize = fields.String(load_default="", dump_default="")
    chosenNumber = fields.Raw(required=False, allow_none=True)


class AddHistorySchema(Schema):
    date = DrawDate(required=True)
    number = fields.Integer(required=True, strict=False, validate=_number)
    name = fields.String(required=False, load_default="")
    prize = fields.String(required=False, load_default="")
    chosenNumber = fields.Raw(required=False, allow_none=True, load_default=None)


class HistoryEntrySchema(Schema):
    """One record of a history posted back by the client."""

    class Meta:
        unknown = EXCLUDE

    date = DrawDate(required=True)
    number = fields.Integer(required=True, strict=False, validate=_number)
    name = fields.String(load_default="")
    prize = fields.String(load_default="")
    chosenNumber = fields.Raw(required=False, allow_none=True)


class SaveHistorySchema(Schema):
    history = fields.List(fields.Nested(HistoryEntrySchema), required=True)

    @pre_load
    def _wrap_bare_list(self, data, **kwargs):  # type: ignore[no-untyped-def]
        if isinstance(data, list):
            return {"history": data}
        return data


class HistoryKeySchema(Schema):
    """Identify a record by its date and number."""

    date = DrawDate(required=True)
    number = fields.Integer(required=True, strict=False, validate=_number)


class UpdateWinnerSchema(HistoryKeySchema):
    name = fields.String(required=False, load_default="", allow_none=True)


class UpdateWinnerPrizeSchema(Schema):
    date = DrawDate(required=True)
    name = fields.String(required=True)
    prize = fields.String(required=False, load_default="", allow_none=True)

    @validates("name")
    def _name_not_blank(self, value, **kwargs):  # type: ignore[no-untyped-def]
        if not str(value).strip():
            raise ValidationError("Name must not be empty")
