from flask import request
from marshmallow import EXCLUDE, ValidationError as SchemaValidationError, validate, validates_schema

from socialapp.errors import ValidationError
from socialapp.extensions.extensions import ma


class StrippedString(ma.String):
    def _deserialize(self, value, attr, data, **kwargs):
        return super()._deserialize(value, attr, data, **kwargs).strip()


def _optional_string(**kwargs):
    return StrippedString(load_default=None, allow_none=True, **kwargs)


class RequestSchema(ma.Schema):
    """Base for JSON bodies; ``error_message`` is what the client sees on failure."""

    error_message = "Invalid request"

    class Meta:
        unknown = EXCLUDE


class RegisterSchema(RequestSchema):
    error_message = "username+password required"

    username = StrippedString(required=True, validate=validate.Length(min=1))
    password = ma.String(required=True, validate=validate.Length(min=1))
    display = _optional_string()


class LoginSchema(RequestSchema):
    error_message = "username+password required"

    username = StrippedString(required=True, validate=validate.Length(min=1))
    password = ma.String(required=True, validate=validate.Length(min=1))


class ProfileUpdateSchema(RequestSchema):
    error_message = "display must be a string"

    # Not stripped: whitespace-only names are stored as sent.
    display = ma.String(load_default=None, allow_none=True)


class PostCreateSchema(RequestSchema):
    error_message = "need text or image"

    text = _optional_string()
    image = _optional_string()

    @validates_schema
    def require_text_or_image(self, data, **kwargs):
        if not data.get("text") and not data.get("image"):
            raise SchemaValidationError("need text or image")


class CommentCreateSchema(RequestSchema):
    error_message = "comment text required"

    # Emptiness is checked after the post lookup so a missing post wins.
    text = _optional_string()


class MessageCreateSchema(RequestSchema):
    error_message = "to+text required"

    to = StrippedString(required=True, validate=validate.Length(min=1))
    text = ma.String(required=True, validate=validate.Length(min=1))


def load_request(schema):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Invalid JSON body")

    try:
        return schema.load(data)
    except SchemaValidationError as e:
        raise ValidationError(schema.error_message) from e
