from datetime import date, datetime

from marshmallow import Schema, fields, validate, ValidationError, EXCLUDE

from ..models.enums import CLAIM_STATUSES


class PublicationDate(fields.Field):
    """Accepts YYYY-MM-DD or a full ISO-8601 timestamp; keeps the calendar date."""

    default_error_messages = {"invalid": "Not a valid date."}

    def _deserialize(self, value, attr, data, **kwargs):
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if not isinstance(value, str) or not value.strip():
            raise self.make_error("invalid")
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            return date.fromisoformat(raw[:10]) if len(raw) == 10 else datetime.fromisoformat(raw).date()
        except ValueError as e:
            raise self.make_error("invalid") from e

    def _serialize(self, value, attr, obj, **kwargs):
        return value.isoformat() if value is not None else None


class ClaimCreateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    claim_title = fields.Str(
        required=True,
        validate=validate.Length(min=1, error="Claim title is required"),
        error_messages={"required": "Claim title is required"},
    )
    description = fields.Str(allow_none=True, load_default=None)
    published_url = fields.Str(allow_none=True, load_default=None)
    category = fields.Str(allow_none=True, load_default="")
    date_published = PublicationDate(allow_none=True, load_default=None)
    status = fields.Str(
        allow_none=True,
        load_default=None,
        validate=validate.OneOf(CLAIM_STATUSES, error="Invalid status"),
    )


class ClaimUpdateSchema(Schema):
    """Partial update: absent and null both leave the stored value alone."""

    class Meta:
        unknown = EXCLUDE

    description = fields.Str(allow_none=True)
    comments = fields.Str(allow_none=True)
    status = fields.Str(
        allow_none=True,
        validate=validate.OneOf(CLAIM_STATUSES, error="Invalid status"),
    )


class ClaimFilterSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    search = fields.Str(load_default=None)
    category = fields.Str(load_default=None)
    status = fields.Str(load_default=None)
    date_from = fields.Date(data_key="dateFrom", load_default=None)
    date_to = fields.Date(data_key="dateTo", load_default=None)

    def load_args(self, args):
        # Empty query values mean "no filter"
        cleaned = {k: v for k, v in args.items() if isinstance(v, str) and v.strip()}
        result = self.load(cleaned)
        if result["date_from"] and result["date_to"] and result["date_from"] > result["date_to"]:
            raise ValidationError("dateFrom must not be after dateTo", "dateFrom")
        return result
