from marshmallow import Schema, fields, validate, pre_load, EXCLUDE


class CredentialsSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    username = fields.Str(
        required=True,
        validate=validate.Length(min=1, max=120, error="Username is required"),
        error_messages={"required": "Username is required"},
    )
    password = fields.Str(
        required=True,
        validate=validate.Length(min=1, error="Password is required"),
        error_messages={"required": "Password is required"},
    )

    @pre_load
    def _strip_username(self, data, **kwargs):
        if isinstance(data, dict) and isinstance(data.get("username"), str):
            data = dict(data)
            data["username"] = data["username"].strip()
        return data
