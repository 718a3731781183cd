from marshmallow import Schema, fields, validate, EXCLUDE

MESSAGE_ROLES = ("user", "assistant", "system")


class MessageSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    role = fields.Str(required=True, validate=validate.OneOf(MESSAGE_ROLES))
    content = fields.Str(required=True)


class ClaimFieldsSchema(Schema):
    """Claim fields posted by the client when a conversation starts."""

    class Meta:
        unknown = EXCLUDE

    claim_nb_tx = fields.Str(allow_none=True, load_default=None)
    claim_title = fields.Str(allow_none=True, load_default=None)
    date_published = fields.Str(allow_none=True, load_default=None)
    published_url = fields.Str(allow_none=True, load_default=None)
    description = fields.Str(allow_none=True, load_default=None)
    comments = fields.Str(allow_none=True, load_default=None)
    category = fields.Str(allow_none=True, load_default=None)


class RTIStartSchema(ClaimFieldsSchema):
    claim_id = fields.Int(allow_none=True, load_default=None)


class ChatSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    claim_id = fields.Int(required=True, error_messages={"required": "Claim ID is required", "null": "Claim ID is required"})
    message = fields.Str(required=True, validate=validate.Length(min=1, error="Message is required"))
    messages = fields.List(fields.Nested(MessageSchema), load_default=list)


class GenerateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    claim_id = fields.Int(required=True, error_messages={"required": "Claim ID is required", "null": "Claim ID is required"})
    messages = fields.List(fields.Nested(MessageSchema), load_default=list)
